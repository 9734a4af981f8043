"""
Sample directory content used to seed a fresh database and by the test-suite.
"""

from datetime import datetime, timedelta, timezone

from lawconsult.models.lawyer import Lawyer
from lawconsult.models.review import Review
from lawconsult.models.consultation import Consultation

SPECIALTY_OPTIONS = [
    "民事诉讼",
    "刑事辩护",
    "婚姻家庭",
    "合同纠纷",
    "房产纠纷",
    "劳动争议",
    "知识产权",
    "公司法务",
    "互联网法律",
    "继承纠纷",
    "经济犯罪",
    "职务犯罪",
]

LOCATION_OPTIONS = [
    "北京市",
    "上海市",
    "广州市",
    "深圳市",
    "杭州市",
    "南京市",
    "成都市",
    "武汉市",
    "西安市",
    "重庆市",
]

SAMPLE_LAWYERS = [
    Lawyer(
        id="1",
        name="张明华",
        specialties=["民事诉讼", "合同纠纷", "房产纠纷"],
        experience=15,
        rating=4.8,
        review_count=156,
        hourly_rate=500,
        location="北京市朝阳区",
        description="Senior civil litigator focused on contract and real-estate disputes.",
        education="China University of Political Science and Law, LL.M.",
        certifications=["All China Lawyers Association", "Beijing Lawyers Association"],
        success_cases=280,
        response_time="30分钟内",
        languages=["中文", "英文"],
        is_online=True,
    ),
    Lawyer(
        id="2",
        name="李雅婷",
        specialties=["婚姻家庭", "继承纠纷", "劳动争议"],
        experience=12,
        rating=4.9,
        review_count=203,
        hourly_rate=450,
        location="上海市浦东新区",
        description="Family lawyer experienced in divorce property division and custody.",
        education="East China University of Political Science and Law, J.D.",
        certifications=["Shanghai Bar Association", "Family Law Committee member"],
        success_cases=195,
        response_time="1小时内",
        languages=["中文"],
        is_online=False,
    ),
    Lawyer(
        id="3",
        name="王建国",
        specialties=["刑事辩护", "经济犯罪", "职务犯罪"],
        experience=20,
        rating=4.7,
        review_count=89,
        hourly_rate=800,
        location="广州市天河区",
        description="Criminal defence counsel for economic and official-duty crimes.",
        education="Sun Yat-sen University Law School, LL.M.",
        certifications=["Guangdong Lawyers Association", "Chair, Criminal Law Committee"],
        success_cases=145,
        response_time="2小时内",
        languages=["中文", "粤语"],
        is_online=True,
    ),
    Lawyer(
        id="4",
        name="陈思琪",
        specialties=["知识产权", "互联网法律", "公司法务"],
        experience=8,
        rating=4.6,
        review_count=124,
        hourly_rate=400,
        location="深圳市南山区",
        description="Intellectual-property lawyer serving internet and technology companies.",
        education="Tsinghua University School of Law, LL.M.",
        certifications=["Shenzhen Lawyers Association", "IP Committee member"],
        success_cases=98,
        response_time="1小时内",
        languages=["中文", "英文"],
        is_online=True,
    ),
]

SAMPLE_REVIEWS = [
    Review(id="1", lawyer_id="1", client_id="client1", consultation_id="cons1", rating=5,
           comment="Very professional, resolved my property dispute.", client_name="Mr. Liu",
           created_at=datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)),
    Review(id="2", lawyer_id="1", client_id="client2", consultation_id="cons2", rating=4,
           comment="Thorough analysis and practical advice.", client_name="Ms. Wang",
           created_at=datetime(2024, 1, 10, 14, 20, tzinfo=timezone.utc)),
    Review(id="3", lawyer_id="2", client_id="client3", consultation_id="cons3", rating=5,
           comment="Handled my divorce property division smoothly.", client_name="Ms. Zhang",
           created_at=datetime(2024, 1, 8, 16, 45, tzinfo=timezone.utc)),
    Review(id="4", lawyer_id="3", client_id="client4", consultation_id="cons4", rating=5,
           comment="Strong criminal defence, best possible outcome.", client_name="Mr. Li",
           created_at=datetime(2024, 1, 5, 9, 15, tzinfo=timezone.utc)),
    Review(id="5", lawyer_id="4", client_id="client5", consultation_id="cons5", rating=4,
           comment="Knows trademark law well.", client_name="Mr. Zhao",
           created_at=datetime(2024, 1, 3, 11, 30, tzinfo=timezone.utc)),
]


def sample_consultations(now: datetime | None = None) -> list[Consultation]:
    """Consultations scheduled relative to ``now``."""
    now = now or datetime.now(timezone.utc)
    day = timedelta(days=1)
    return [
        Consultation(id="1", client_id="client1", lawyer_id="1", type="video", status="completed",
                     scheduled_at=now - 7 * day, duration=60, fee=800, amount=800,
                     description="Questions about a home purchase contract",
                     created_at=now - 8 * day),
        Consultation(id="2", client_id="client1", lawyer_id="2", type="phone", status="confirmed",
                     scheduled_at=now + 2 * day, duration=30, fee=480, amount=480,
                     description="Employment contract dispute",
                     created_at=now - day),
        Consultation(id="3", client_id="client1", lawyer_id="3", type="text", status="pending",
                     scheduled_at=now + day, duration=0, fee=300, amount=300,
                     description="Division of marital property",
                     created_at=now),
    ]
