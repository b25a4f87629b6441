"""
Localized keyword table used by the context classifier and the AI gateway.

Every language carries its own vocabulary. Lookups merge the requested
language with English so mixed-language input ("my bond 押金") still matches.
"""
from typing import Dict, Tuple

from .translations import DEFAULT_LANGUAGE, normalize_language

ROLE_ORDER = ("tenant", "landlord", "buyer", "seller")
ISSUE_ORDER = (
    "deposit",
    "repairs",
    "eviction",
    "lease_break",
    "rent_increase",
    "inspection",
    "contract",
    "buying_process",
)

KEYWORDS = {
    "en": {
        "role": {
            # Tenants talk about "my landlord"; a bare "landlord" says nothing about who is asking.
            "tenant": (
                "my landlord", "our landlord", "i'm a tenant", "i am a tenant", "as a tenant",
                "i'm renting", "i am renting", "we are renting", "renting a", "renting an",
                "my lease", "my rental agreement", "my apartment", "renter",
            ),
            "landlord": (
                "my tenant", "our tenant", "i'm a landlord", "i am a landlord", "as a landlord",
                "my rental property", "my investment property", "i rent out", "i own a rental",
                "property manager",
            ),
            "buyer": (
                "i want to buy", "buying", "buy a", "purchase", "purchasing", "first home",
                "first-home", "home loan", "mortgage", "as a buyer", "i'm a buyer", "i am a buyer",
            ),
            "seller": (
                "selling", "sell my", "as a seller", "i'm a seller", "i am a seller",
                "list my", "listing my", "vendor",
            ),
        },
        "issue": {
            "deposit": ("deposit", "rental bond", "my bond", "bond back", "bond refund"),
            "repairs": (
                "repair", "maintenance", "broken", "leak", "mould", "mold", "not working",
                "habitab", "hot water", "heater",
            ),
            "eviction": ("evict", "notice to vacate", "kicked out", "kick me out", "kick us out"),
            "lease_break": (
                "break a lease", "break my lease", "break the lease", "break lease",
                "breaking my lease", "breaking the lease", "end my lease early",
                "terminate my lease", "terminate the lease", "early termination", "move out early",
            ),
            "rent_increase": (
                "rent increase", "increase rent", "increase the rent", "increase my rent",
                "increasing the rent", "raise the rent", "raise my rent", "rent hike",
                "rent went up", "rent is going up",
            ),
            "inspection": ("inspection", "inspect", "building report", "pest report"),
            "contract": ("contract", "agreement", "clause", "cooling off", "cooling-off", "fine print"),
            "buying_process": (
                "buying", "buy a", "purchase", "mortgage", "settlement", "conveyanc",
                "auction", "make an offer", "home loan", "first home",
            ),
        },
        "urgency": {
            "high": (
                "urgent", "emergency", "immediately", "right away", "asap", "today", "tonight",
                "tomorrow", "eviction notice", "locked out", "changed the locks", "changed my locks",
                "no heat", "no water", "no electricity", "gas leak", "unsafe", "dangerous",
                "police", "court date", "homeless", "threaten",
            ),
            "medium": (
                "soon", "this week", "next week", "deadline", "notice", "within days",
                "running out of time", "worried",
            ),
        },
        "housing": (
            "rent", "rental", "lease", "tenant", "landlord", "eviction", "evict", "deposit", "bond",
            "buy", "buying", "purchase", "mortgage", "property", "house", "apartment", "unit",
            "home", "housing", "real estate", "repair", "maintenance", "inspection", "contract",
            "closing", "settlement", "title", "deed", "zoning", "hoa", "strata", "condo",
            "subletting", "utilities", "habitability", "discrimination",
        ),
        "urgent": (
            "urgent", "emergency", "immediately", "right away", "contact authorities",
            "call police", "emergency repair", "health hazard", "unsafe conditions",
            "eviction notice", "court date",
        ),
    },
    "zh": {
        "role": {
            "tenant": ("我的房东", "我是租户", "我是租客", "我租的", "我在租"),
            "landlord": ("我的租户", "我的租客", "我是房东", "我出租"),
            "buyer": ("我想买", "买房", "购房", "首付", "房贷"),
            "seller": ("卖房", "出售我的", "我是卖家"),
        },
        "issue": {
            "deposit": ("押金", "保证金"),
            "repairs": ("维修", "修理", "漏水", "坏了", "发霉"),
            "eviction": ("驱逐", "赶出", "搬离通知"),
            "lease_break": ("提前解约", "终止租约", "解除租约", "提前退租"),
            "rent_increase": ("涨租", "涨房租", "涨多少租金", "加租", "租金上涨"),
            "inspection": ("验房", "房屋检查", "检查房屋"),
            "contract": ("合同", "协议", "条款"),
            "buying_process": ("买房", "购买", "抵押", "过户", "首付"),
        },
        "urgency": {
            "high": ("紧急", "马上", "立即", "今天", "报警", "换锁"),
            "medium": ("尽快", "这周", "下周", "截止", "通知"),
        },
        "housing": ("租", "房", "押金", "合同", "维修", "驱逐", "物业"),
        "urgent": ("紧急", "立即", "报警"),
    },
    "vi": {
        "role": {
            "tenant": ("chủ nhà của tôi", "tôi là người thuê", "tôi đang thuê"),
            "landlord": ("người thuê của tôi", "tôi là chủ nhà", "tôi cho thuê"),
            "buyer": ("tôi muốn mua", "mua nhà", "vay thế chấp"),
            "seller": ("bán nhà", "tôi muốn bán", "tôi là người bán"),
        },
        "issue": {
            "deposit": ("tiền đặt cọc", "tiền cọc"),
            "repairs": ("sửa chữa", "hư hỏng", "bị dột", "nấm mốc"),
            "eviction": ("trục xuất", "đuổi ra", "đuổi khỏi"),
            "lease_break": ("hủy hợp đồng thuê", "chấm dứt hợp đồng", "dọn đi sớm"),
            "rent_increase": ("tăng tiền thuê", "tăng giá thuê"),
            "inspection": ("kiểm tra nhà", "thẩm định"),
            "contract": ("hợp đồng", "điều khoản", "thỏa thuận"),
            "buying_process": ("mua", "thế chấp", "tiền trả trước"),
        },
        "urgency": {
            "high": ("khẩn cấp", "ngay lập tức", "hôm nay", "cảnh sát", "thay khóa"),
            "medium": ("sớm", "tuần này", "tuần sau", "hạn chót", "thông báo"),
        },
        "housing": ("thuê", "nhà", "cho thuê", "chủ nhà", "hợp đồng", "đặt cọc", "mua"),
        "urgent": ("khẩn cấp", "ngay lập tức", "cảnh sát"),
    },
    "ar": {
        "role": {
            "tenant": ("المالك الخاص بي", "مالك منزلي", "أنا مستأجر", "أستأجر"),
            "landlord": ("المستأجر الخاص بي", "مستأجري", "أنا مالك", "أؤجر"),
            "buyer": ("أريد شراء", "شراء منزل", "رهن عقاري"),
            "seller": ("بيع منزلي", "أريد بيع", "أنا بائع"),
        },
        "issue": {
            "deposit": ("وديعة", "الودائع", "تأمين"),
            "repairs": ("إصلاح", "صيانة", "تسرب", "عفن"),
            "eviction": ("إخلاء", "طرد"),
            "lease_break": ("إنهاء عقد الإيجار", "فسخ العقد"),
            "rent_increase": ("زيادة الإيجار", "رفع الإيجار"),
            "inspection": ("فحص", "معاينة"),
            "contract": ("عقد", "اتفاقية", "بند"),
            "buying_process": ("شراء", "رهن عقاري", "دفعة أولى"),
        },
        "urgency": {
            "high": ("عاجل", "طوارئ", "فوراً", "اليوم", "الشرطة"),
            "medium": ("قريباً", "هذا الأسبوع", "الأسبوع القادم", "مهلة", "إشعار"),
        },
        "housing": ("إيجار", "استئجار", "مستأجر", "مالك", "منزل", "عقار", "شقة"),
        "urgent": ("عاجل", "طوارئ", "فوراً", "الشرطة"),
    },
    "hi": {
        "role": {
            "tenant": ("मेरा मकान मालिक", "मेरे मकान मालिक", "मैं किरायेदार", "मैं किराए पर"),
            "landlord": ("मेरा किरायेदार", "मेरे किरायेदार", "मैं मकान मालिक"),
            "buyer": ("खरीदना चाहता", "खरीदना चाहती", "घर खरीद", "होम लोन"),
            "seller": ("बेचना चाहता", "बेचना चाहती", "घर बेच"),
        },
        "issue": {
            "deposit": ("जमा राशि", "डिपॉजिट", "सिक्योरिटी"),
            "repairs": ("मरम्मत", "रखरखाव", "टूटा", "रिसाव"),
            "eviction": ("बेदखली", "बेदखल", "निकाल"),
            "lease_break": ("पट्टा तोड़", "पट्टा कैसे तोड़", "अनुबंध समाप्त", "जल्दी खाली"),
            "rent_increase": ("किराया बढ़", "किराया वृद्धि"),
            "inspection": ("निरीक्षण", "जांच"),
            "contract": ("अनुबंध", "समझौता", "शर्तें"),
            "buying_process": ("खरीद", "बंधक", "डाउन पेमेंट"),
        },
        "urgency": {
            "high": ("आपातकाल", "तुरंत", "अत्यावश्यक", "आज", "पुलिस"),
            "medium": ("जल्द", "इस सप्ताह", "अगले सप्ताह", "समय सीमा", "नोटिस"),
        },
        "housing": ("किराया", "किरायेदार", "मकान", "घर", "संपत्ति", "पट्टा"),
        "urgent": ("आपातकाल", "तुरंत", "अत्यावश्यक", "पुलिस"),
    },
    "id": {
        "role": {
            "tenant": ("pemilik rumah saya", "pemilik kos saya", "saya penyewa", "saya menyewa"),
            "landlord": ("penyewa saya", "saya pemilik", "saya menyewakan"),
            "buyer": ("ingin membeli", "beli rumah", "membeli rumah", "kpr"),
            "seller": ("menjual rumah", "ingin menjual", "saya penjual"),
        },
        "issue": {
            "deposit": ("deposit", "uang jaminan"),
            "repairs": ("perbaikan", "rusak", "bocor", "jamur"),
            "eviction": ("penggusuran", "diusir", "mengusir"),
            "lease_break": ("membatalkan sewa", "memutus sewa", "mengakhiri sewa"),
            "rent_increase": ("kenaikan sewa", "menaikkan sewa", "sewa naik"),
            "inspection": ("inspeksi", "pemeriksaan"),
            "contract": ("kontrak", "perjanjian", "klausul"),
            "buying_process": ("beli", "membeli", "hipotek", "uang muka"),
        },
        "urgency": {
            "high": ("darurat", "mendesak", "hari ini", "polisi"),
            "medium": ("segera", "minggu ini", "minggu depan", "tenggat", "pemberitahuan"),
        },
        "housing": ("sewa", "penyewa", "pemilik", "rumah", "properti", "apartemen"),
        "urgent": ("darurat", "segera", "mendesak", "polisi"),
    },
}


def _merge(primary: Tuple[str, ...], fallback: Tuple[str, ...]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(primary + fallback))


def keyword_sets(language: str, category: str) -> Dict[str, Tuple[str, ...]]:
    """
    Keyword sets of a grouped category ("role", "issue", "urgency") for a language,
    each merged with the English set of the same key.
    """
    language = normalize_language(language)
    english = KEYWORDS[DEFAULT_LANGUAGE][category]
    if language == DEFAULT_LANGUAGE:
        return dict(english)
    localized = KEYWORDS[language][category]
    return {key: _merge(localized.get(key, ()), english[key]) for key in english}


def vocabulary(language: str, category: str) -> Tuple[str, ...]:
    """Flat vocabulary ("housing", "urgent") for a language merged with English."""
    language = normalize_language(language)
    english = KEYWORDS[DEFAULT_LANGUAGE][category]
    if language == DEFAULT_LANGUAGE:
        return english
    return _merge(KEYWORDS[language][category], english)


def contains_any(text: str, keywords) -> bool:
    lowered = text.lower()
    return any(keyword.lower() in lowered for keyword in keywords)
