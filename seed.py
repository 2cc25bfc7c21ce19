"""
Mock data loaded at startup.

Functions return fresh objects on every call so each store (and each test)
gets its own copy.
"""

from datetime import datetime, timezone
from typing import Dict, List

from reply_tree import ReplyTree
from schemas import (
    DEFAULT_AVATAR,
    Author,
    ForumCategory,
    Lawyer,
    Reply,
    Resource,
    Topic,
    User,
)


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


# ---------- Forum ----------

def seed_topics() -> List[Topic]:
    heating = Topic(
        id="1",
        title="Landlord won't fix heating, what are my options?",
        category="Housing & Tenant Issues",
        content=(
            "My apartment heating has been broken for two weeks now and temperatures are dropping. "
            "I've contacted my landlord multiple times but they keep saying they'll 'get to it'. "
            "What are my legal options?"
        ),
        author=Author(name="John Smith"),
        views=234,
        vote_score=12,
        created_at=_ts("2023-10-25T14:32:00"),
    )
    heating.with_replies(ReplyTree([
        Reply(
            id="r1-1",
            content=(
                "You may have a right to withhold rent or repair and deduct in many jurisdictions. "
                "Check your local tenant rights."
            ),
            author=Author(name="Legal Helper"),
            created_at=_ts("2023-10-26T10:00:00"),
        ),
        Reply(
            id="r1-2",
            content=(
                "Document every communication with your landlord and the dates the heating was out. "
                "This will help if you need to go to court."
            ),
            author=Author(name="Tenant Advocate"),
            created_at=_ts("2023-10-26T14:20:00"),
        ),
    ]))

    return [
        heating,
        Topic(
            id="2",
            title="How does child custody work with an out-of-state move?",
            category="Family Law",
            content=(
                "I have joint custody of my children with my ex-spouse. I received a job offer in another "
                "state that would significantly improve our financial situation. "
                "How can I legally move with my children?"
            ),
            author=Author(name="Parent In Need"),
            views=128,
            vote_score=8,
            created_at=_ts("2023-10-24T09:15:00"),
        ),
        Topic(
            id="3",
            title="Employer not paying overtime, what documentation do I need?",
            category="Employment Law",
            content=(
                "I've been working 50+ hours weekly for the past three months, but my employer hasn't paid "
                "any overtime. What kind of documentation should I gather to support my case?"
            ),
            author=Author(name="Worker Rights"),
            views=302,
            vote_score=15,
            created_at=_ts("2023-10-20T16:45:00"),
        ),
        Topic(
            id="4",
            title="Success story: Won my security deposit case in small claims!",
            category="Small Claims",
            content=(
                "Just wanted to share my success story of winning my security deposit case in small claims "
                "court. Happy to answer questions about the process!"
            ),
            author=Author(name="Victorious Renter"),
            views=253,
            vote_score=6,
            created_at=_ts("2023-10-22T11:20:00"),
        ),
    ]


def seed_forum_categories() -> List[ForumCategory]:
    return [
        ForumCategory(name="Housing & Tenant Issues", icon="fa-home", topics=523, posts=2100),
        ForumCategory(name="Family Law", icon="fa-user-friends", topics=412, posts=1800),
        ForumCategory(name="Employment Law", icon="fa-briefcase", topics=385, posts=1500),
        ForumCategory(name="Small Claims", icon="fa-gavel", topics=247, posts=982),
    ]


# ---------- Resources ----------

RESOURCE_CATEGORIES = [
    "Housing & Tenant Rights",
    "Family Law",
    "Employment Law",
    "Consumer Rights",
    "Civil Rights",
    "Other",
    "Immigration",
    "Traffic & Driving",
    "Criminal Defense",
]

_PDF_BASE = "https://ik.imagekit.io/waghDev/lawsphere/pdf"

RESOURCE_FILE_URLS: Dict[str, str] = {
    "Woman_Law.pdf": f"{_PDF_BASE}/Woman_Law.pdf?updatedAt=1742669340490",
    "englishconstitution.pdf": f"{_PDF_BASE}/englishconstitution.pdf?updatedAt=1742669337718",
    "Model-Tenancy-Act-English.pdf": f"{_PDF_BASE}/Model-Tenancy-Act-English-02_06_2021.pdf?updatedAt=1742669334836",
    "Labour_Law.pdf": f"{_PDF_BASE}/Labour_Law.pdf?updatedAt=1742669334242",
    "RIGHT_EVICTION.pdf": f"{_PDF_BASE}/RIGHT_EVICTION.pdf?updatedAt=1742669333941",
    "Tenants-Rights-Handbook.pdf": f"{_PDF_BASE}/Tenants-Rights-Handbook.pdf?updatedAt=1742669333336",
    "PRIVACY_LAW.pdf": f"{_PDF_BASE}/PRIVACY_LAW.pdf?updatedAt=1742669331369",
    "Notice-of-Termination.pdf": f"{_PDF_BASE}/Notice-of-Termination.pdf?updatedAt=1742669330931",
    # hosted under a misspelled name
    "DISCRIMINATION.pdf": f"{_PDF_BASE}/DISCRIMATION.pdf?updatedAt=1742669330031",
    "Tenants-Rights.pdf": f"{_PDF_BASE}/Tenants-Rights-Handbook.pdf?updatedAt=1742669333336",
}


def seed_resources() -> List[Resource]:
    rows = [
        ("1", "Know Your Rights: Tenant Basics",
         "Essential information for renters about lease agreements, maintenance responsibilities, "
         "eviction procedures, and security deposits.",
         "Guide", "Housing & Tenant Rights", "Tenants-Rights.pdf"),
        ("2", "Power of Attorney Form",
         "Customize this power of attorney template to authorize someone to make legal decisions on your behalf.",
         "Template", "Family Law", None),
        ("3", "Discrimination Law Overview",
         "Comprehensive guide to discrimination laws and protections for individuals in various settings.",
         "Guide", "Civil Rights", "DISCRIMINATION.pdf"),
        ("4", "English Constitution",
         "Overview of the English constitutional framework and principles.",
         "Guide", "Other", "englishconstitution.pdf"),
        ("5", "Labour Law Handbook",
         "Guide to employment laws, worker rights, and employer obligations.",
         "Guide", "Employment Law", "Labour_Law.pdf"),
        ("6", "Model Tenancy Act",
         "Complete text of the Model Tenancy Act with explanations and implications for landlords and tenants.",
         "Guide", "Housing & Tenant Rights", "Model-Tenancy-Act-English.pdf"),
        ("7", "Notice of Termination Template",
         "Template for creating a legally valid termination notice for tenancy agreements.",
         "Template", "Housing & Tenant Rights", "Notice-of-Termination.pdf"),
        ("8", "Privacy Law Guide",
         "Understanding privacy laws and your rights to data protection and confidentiality.",
         "Guide", "Consumer Rights", "PRIVACY_LAW.pdf"),
        ("9", "Eviction Rights and Processes",
         "Legal guide to eviction procedures and tenant rights during eviction.",
         "Guide", "Housing & Tenant Rights", "RIGHT_EVICTION.pdf"),
        ("10", "Tenants' Rights Handbook",
         "Comprehensive handbook on tenant rights, responsibilities, and legal remedies.",
         "Guide", "Housing & Tenant Rights", "Tenants-Rights-Handbook.pdf"),
        ("11", "Women's Legal Rights",
         "Guide to legal protections and rights specific to women across various areas of law.",
         "Guide", "Civil Rights", "Woman_Law.pdf"),
    ]
    return [
        Resource(id=rid, title=title, description=desc, type=rtype, category=category, file=file)
        for rid, title, desc, rtype, category, file in rows
    ]


# ---------- Lawyers & users ----------

_LAWYERS = [
    {
        "id": "l1",
        "name": "Priya Sharma",
        "email": "priya.sharma@legalconnect.test",
        "mobile": "+91 9876512340",
        "practiceAreas": ["Family Law", "Housing & Tenants Rights"],
        "serviceTypes": ["Pro Bono", "Low Cost"],
        "education": [{"institution": "NLU Delhi", "degree": "LL.B.", "graduationYear": 2015}],
        "languages": ["English", "Hindi"],
        "officeAddress": {
            "street": "12 Legal Lane", "city": "Mumbai", "state": "Maharashtra", "zipCode": "400001",
            "country": "India", "coordinates": {"latitude": 19.076, "longitude": 72.8777},
        },
        "consultationFee": 0,
        "availability": [
            {"day": "Monday", "startTime": "09:00", "endTime": "17:00"},
            {"day": "Wednesday", "startTime": "09:00", "endTime": "17:00"},
            {"day": "Friday", "startTime": "09:00", "endTime": "13:00"},
        ],
        "isVerified": True,
    },
    {
        "id": "l2",
        "name": "Rahul Verma",
        "email": "rahul.verma@legalconnect.test",
        "mobile": "+91 9876512341",
        "practiceAreas": ["Criminal Defense", "Civil Rights"],
        "serviceTypes": ["Pro Bono", "Sliding Scale"],
        "education": [{"institution": "NALSAR Hyderabad", "degree": "LL.B.", "graduationYear": 2012}],
        "languages": ["English", "Hindi", "Marathi"],
        "officeAddress": {
            "street": "45 Court Road", "city": "Pune", "state": "Maharashtra", "zipCode": "411001",
            "country": "India", "coordinates": {"latitude": 18.5204, "longitude": 73.8567},
        },
        "consultationFee": 500,
        "availability": [
            {"day": "Tuesday", "startTime": "10:00", "endTime": "18:00"},
            {"day": "Thursday", "startTime": "10:00", "endTime": "18:00"},
        ],
        "isVerified": True,
    },
    {
        "id": "l3",
        "name": "Anita Desai",
        "email": "anita.desai@legalconnect.test",
        "mobile": "+91 9876512342",
        "practiceAreas": ["Employment Law", "Consumer Protection"],
        "serviceTypes": ["Low Cost", "Standard Rates"],
        "education": [
            {"institution": "ILS Pune", "degree": "LL.B.", "graduationYear": 2018},
            {"institution": "Symbiosis", "degree": "LL.M. Labour Law", "graduationYear": 2020},
        ],
        "languages": ["English", "Hindi"],
        "officeAddress": {
            "street": "7 Business Park", "city": "Bangalore", "state": "Karnataka", "zipCode": "560001",
            "country": "India", "coordinates": {"latitude": 12.9716, "longitude": 77.5946},
        },
        "consultationFee": 1000,
        "availability": [
            {"day": d, "startTime": "09:00", "endTime": "17:00"}
            for d in ("Monday", "Tuesday", "Wednesday", "Thursday")
        ] + [{"day": "Friday", "startTime": "09:00", "endTime": "15:00"}],
        "isVerified": True,
    },
    {
        "id": "l4",
        "name": "Vikram Singh",
        "email": "vikram.singh@legalconnect.test",
        "mobile": "+91 9876512343",
        "practiceAreas": ["Immigration", "Civil Rights"],
        "serviceTypes": ["Pro Bono", "Low Cost", "Sliding Scale"],
        "education": [{"institution": "NUJS Kolkata", "degree": "LL.B.", "graduationYear": 2014}],
        "languages": ["English", "Hindi", "Bengali"],
        "officeAddress": {
            "street": "22 Embassy Row", "city": "New Delhi", "state": "Delhi", "zipCode": "110001",
            "country": "India", "coordinates": {"latitude": 28.6139, "longitude": 77.209},
        },
        "consultationFee": 0,
        "availability": [
            {"day": "Monday", "startTime": "10:00", "endTime": "16:00"},
            {"day": "Thursday", "startTime": "10:00", "endTime": "16:00"},
        ],
        "isVerified": True,
    },
    {
        "id": "l5",
        "name": "Meera Krishnan",
        "email": "meera.krishnan@legalconnect.test",
        "mobile": "+91 9876512344",
        "practiceAreas": ["Family Law", "Consumer Protection", "Other"],
        "serviceTypes": ["Pro Bono", "Low Cost"],
        "education": [{"institution": "GLC Mumbai", "degree": "LL.B.", "graduationYear": 2016}],
        "languages": ["English", "Hindi", "Tamil"],
        "officeAddress": {
            "street": "3 Marina Plaza", "city": "Chennai", "state": "Tamil Nadu", "zipCode": "600001",
            "country": "India", "coordinates": {"latitude": 13.0827, "longitude": 80.2707},
        },
        "consultationFee": 250,
        "availability": [
            {"day": "Tuesday", "startTime": "09:00", "endTime": "17:00"},
            {"day": "Friday", "startTime": "09:00", "endTime": "17:00"},
            {"day": "Saturday", "startTime": "09:00", "endTime": "13:00"},
        ],
        "isVerified": True,
    },
]


def seed_lawyers() -> List[Lawyer]:
    return [Lawyer.model_validate(row) for row in _LAWYERS]


def seed_users() -> List[User]:
    users = [
        User(
            id="u1",
            name="Demo User",
            email="demo@legalconnect.test",
            location="Mumbai",
            bio="Looking for help with a tenancy dispute.",
        )
    ]
    users.extend(
        User(
            id=f"u-{row['id']}",
            name=row["name"],
            email=row["email"],
            mobile=row["mobile"],
            location=row["officeAddress"]["city"],
            profile_image=DEFAULT_AVATAR,
            role="lawyer",
        )
        for row in _LAWYERS
    )
    return users
