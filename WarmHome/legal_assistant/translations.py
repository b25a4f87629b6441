from typing import Dict, List

SUPPORTED_LANGUAGES = ("en", "zh", "vi", "ar", "hi", "id")
DEFAULT_LANGUAGE = "en"

LANGUAGE_NAMES = {
    "en": "English",
    "zh": "Chinese (Simplified)",
    "vi": "Vietnamese",
    "ar": "Arabic",
    "hi": "Hindi",
    "id": "Indonesian",
}

MESSAGES: Dict[str, Dict[str, str]] = {
    "welcome": {
        "en": "Hello! I'm here to help with legal questions about renting and buying houses. How can I assist you today?",
        "zh": "您好！我在这里帮助您解答有关租房和买房的法律问题。今天我可以为您提供什么帮助？",
        "vi": "Xin chào! Tôi ở đây để giúp bạn giải đáp các câu hỏi pháp lý về thuê và mua nhà. Hôm nay tôi có thể hỗ trợ bạn điều gì?",
        "ar": "مرحباً! أنا هنا لمساعدتك في الأسئلة القانونية حول استئجار وشراء المنازل. كيف يمكنني مساعدتك اليوم؟",
        "hi": "नमस्ते! मैं घर किराए पर लेने और खरीदने के बारे में कानूनी सवालों में आपकी मदद के लिए यहाँ हूँ। आज मैं आपकी कैसे सहायता कर सकता हूँ?",
        "id": "Halo! Saya di sini untuk membantu pertanyaan hukum tentang menyewa dan membeli rumah. Bagaimana saya bisa membantu Anda hari ini?",
    },
    "session_expired": {
        "en": "Your chat session has expired due to {minutes} minutes of inactivity. Please start a new chat to continue.",
        "zh": "您的聊天会话因{minutes}分钟无活动而过期。请开始新的聊天以继续。",
        "vi": "Phiên trò chuyện của bạn đã hết hạn do không hoạt động trong {minutes} phút. Vui lòng bắt đầu cuộc trò chuyện mới để tiếp tục.",
        "ar": "انتهت صلاحية جلسة الدردشة بسبب عدم النشاط لمدة {minutes} دقيقة. يرجى بدء محادثة جديدة للمتابعة.",
        "hi": "निष्क्रियता के {minutes} मिनट के कारण आपका चैट सेशन समाप्त हो गया है। जारी रखने के लिए कृपया नई चैट शुरू करें।",
        "id": "Sesi obrolan Anda telah berakhir karena tidak aktif selama {minutes} menit. Silakan mulai obrolan baru untuk melanjutkan.",
    },
    "session_ended": {
        "en": "Your session has ended. Start a new chat to continue.",
        "zh": "您的会话已结束。开始新聊天以继续。",
        "vi": "Phiên của bạn đã kết thúc. Bắt đầu cuộc trò chuyện mới để tiếp tục.",
        "ar": "انتهت جلستك. ابدأ محادثة جديدة للمتابعة.",
        "hi": "आपका सेशन समाप्त हो गया है। जारी रखने के लिए नई चैट शुरू करें।",
        "id": "Sesi Anda telah berakhir. Mulai obrolan baru untuk melanjutkan.",
    },
    "fallback": {
        "en": "I'm having trouble connecting to provide a detailed response right now. For housing legal matters, please try rephrasing your question or consider connecting with one of our legal volunteers for personalized assistance.",
        "zh": "我现在无法连接以提供详细回复。对于住房法律事务，请尝试重新表述您的问题，或考虑联系我们的法律志愿者获得个人帮助。",
        "vi": "Tôi đang gặp khó khăn trong việc kết nối để cung cấp phản hồi chi tiết ngay bây giờ. Đối với các vấn đề pháp lý về nhà ở, vui lòng thử diễn đạt lại câu hỏi của bạn hoặc cân nhắc kết nối với một trong những tình nguyện viên pháp lý của chúng tôi.",
        "ar": "أواجه صعوبة في الاتصال لتقديم رد مفصل الآن. لشؤون الإسكان القانونية، يرجى المحاولة إعادة صياغة سؤالك أو النظر في التواصل مع أحد متطوعينا القانونيين.",
        "hi": "मुझे अभी विस्तृत उत्तर प्रदान करने के लिए कनेक्ट करने में समस्या हो रही है। आवास कानूनी मामलों के लिए, कृपया अपने प्रश्न को दोबारा कहने का प्रयास करें या व्यक्तिगत सहायता के लिए हमारे कानूनी स्वयंसेवकों से जुड़ने पर विचार करें।",
        "id": "Saya mengalami kesulitan menghubungkan untuk memberikan respons terperinci saat ini. Untuk masalah hukum perumahan, silakan coba mengulang pertanyaan Anda atau pertimbangkan untuk terhubung dengan salah satu relawan hukum kami.",
    },
    "feedback_prompt": {
        "en": "Was this answer helpful?",
        "zh": "这个回答对您有帮助吗？",
        "vi": "Câu trả lời này có hữu ích không?",
        "ar": "هل كانت هذه الإجابة مفيدة؟",
        "hi": "क्या यह उत्तर सहायक था?",
        "id": "Apakah jawaban ini membantu?",
    },
    "feedback_thanks": {
        "en": "Thank you for your feedback! Let me know if you have any other housing questions.",
        "zh": "感谢您的反馈！如果您还有其他住房问题，请告诉我。",
        "vi": "Cảm ơn phản hồi của bạn! Hãy cho tôi biết nếu bạn có câu hỏi nào khác về nhà ở.",
        "ar": "شكراً لملاحظاتك! أخبرني إذا كانت لديك أي أسئلة أخرى حول السكن.",
        "hi": "आपकी प्रतिक्रिया के लिए धन्यवाद! यदि आपके आवास से जुड़े कोई और प्रश्न हों तो मुझे बताएं।",
        "id": "Terima kasih atas masukan Anda! Beri tahu saya jika Anda memiliki pertanyaan perumahan lainnya.",
    },
    "ask_more_details": {
        "en": "I'm sorry that wasn't helpful. Could you tell me more about your situation, such as your location, the dates involved and what has happened so far?",
        "zh": "很抱歉没能帮上忙。您能详细说明您的情况吗？例如您所在的地区、相关日期以及目前发生了什么？",
        "vi": "Xin lỗi vì câu trả lời chưa hữu ích. Bạn có thể cho tôi biết thêm về tình huống của bạn, chẳng hạn như địa điểm, các mốc thời gian và những gì đã xảy ra không?",
        "ar": "نأسف لأن الإجابة لم تكن مفيدة. هل يمكنك إخباري بالمزيد عن وضعك، مثل موقعك والتواريخ المعنية وما حدث حتى الآن؟",
        "hi": "क्षमा करें कि यह सहायक नहीं था। क्या आप अपनी स्थिति के बारे में और बता सकते हैं, जैसे आपका स्थान, संबंधित तिथियां और अब तक क्या हुआ है?",
        "id": "Maaf jawaban itu tidak membantu. Bisakah Anda menceritakan lebih banyak tentang situasi Anda, seperti lokasi, tanggal terkait, dan apa yang sudah terjadi?",
    },
    "volunteer_offer": {
        "en": "It looks like this needs a closer look. Would you like to connect with a legal volunteer who can provide personalized assistance?",
        "zh": "看来这个问题需要更仔细的了解。您想联系法律志愿者获得个性化帮助吗？",
        "vi": "Có vẻ vấn đề này cần được xem xét kỹ hơn. Bạn có muốn kết nối với tình nguyện viên pháp lý để được hỗ trợ cá nhân không?",
        "ar": "يبدو أن هذا يحتاج إلى نظرة أدق. هل تود التواصل مع متطوع قانوني يمكنه تقديم المساعدة الشخصية؟",
        "hi": "लगता है इस पर और ध्यान देने की आवश्यकता है। क्या आप एक कानूनी स्वयंसेवक से जुड़ना चाहेंगे जो व्यक्तिगत सहायता प्रदान कर सकते हैं?",
        "id": "Sepertinya ini perlu ditinjau lebih dekat. Apakah Anda ingin terhubung dengan relawan hukum yang dapat memberikan bantuan personal?",
    },
    "off_topic_reminder": {
        "en": "I'm specialized in housing and property legal matters only. Please ask about tenant rights, landlord issues, buying or selling property, leases, evictions, repairs, deposits, or related housing law topics.",
        "zh": "我只专注于住房和房产法律事务。请询问租户权利、房东问题、买卖房产、租约、驱逐、维修、押金或相关住房法律话题。",
        "vi": "Tôi chỉ chuyên về các vấn đề pháp lý nhà ở và bất động sản. Vui lòng hỏi về quyền của người thuê, vấn đề với chủ nhà, mua bán bất động sản, hợp đồng thuê, trục xuất, sửa chữa, tiền đặt cọc hoặc các chủ đề pháp luật nhà ở liên quan.",
        "ar": "أنا متخصص فقط في الشؤون القانونية للإسكان والعقارات. يرجى السؤال عن حقوق المستأجرين أو مشاكل المالك أو شراء وبيع العقارات أو عقود الإيجار أو الإخلاء أو الإصلاحات أو الودائع.",
        "hi": "मैं केवल आवास और संपत्ति से जुड़े कानूनी मामलों में विशेषज्ञ हूँ। कृपया किरायेदार अधिकारों, मकान मालिक की समस्याओं, संपत्ति खरीदने या बेचने, पट्टों, बेदखली, मरम्मत या जमा राशि के बारे में पूछें।",
        "id": "Saya hanya khusus menangani masalah hukum perumahan dan properti. Silakan bertanya tentang hak penyewa, masalah pemilik, jual beli properti, sewa, penggusuran, perbaikan, deposit, atau topik hukum perumahan terkait.",
    },
    "urgent_warning": {
        "en": "URGENT: Your situation may need immediate action. If you are in danger call emergency services, and contact a tenancy advice service or legal aid as soon as possible.",
        "zh": "紧急：您的情况可能需要立即采取行动。如果您处于危险之中，请拨打紧急服务电话，并尽快联系租赁咨询服务或法律援助。",
        "vi": "KHẨN CẤP: Tình huống của bạn có thể cần hành động ngay lập tức. Nếu bạn gặp nguy hiểm, hãy gọi dịch vụ khẩn cấp và liên hệ dịch vụ tư vấn thuê nhà hoặc trợ giúp pháp lý càng sớm càng tốt.",
        "ar": "عاجل: قد يتطلب وضعك إجراءً فورياً. إذا كنت في خطر فاتصل بخدمات الطوارئ، وتواصل مع خدمة استشارات الإيجار أو المساعدة القانونية في أقرب وقت ممكن.",
        "hi": "अत्यावश्यक: आपकी स्थिति में तुरंत कार्रवाई की आवश्यकता हो सकती है। यदि आप खतरे में हैं तो आपातकालीन सेवाओं को कॉल करें, और जल्द से जल्द किरायेदारी सलाह सेवा या कानूनी सहायता से संपर्क करें।",
        "id": "MENDESAK: Situasi Anda mungkin memerlukan tindakan segera. Jika Anda dalam bahaya hubungi layanan darurat, dan hubungi layanan konsultasi sewa atau bantuan hukum sesegera mungkin.",
    },
    "volunteer_connecting": {
        "en": "Connecting you with a legal volunteer... Please wait a moment. I've shared that you are a {role} asking about {issue}.",
        "zh": "正在为您连接法律志愿者...请稍候。我已告知志愿者您是{role}，咨询的是{issue}问题。",
        "vi": "Đang kết nối bạn với tình nguyện viên pháp lý... Vui lòng đợi một chút. Tôi đã chia sẻ rằng bạn là {role} và đang hỏi về {issue}.",
        "ar": "جاري ربطك بمتطوع قانوني... يرجى الانتظار لحظة. لقد أبلغته بأنك {role} وتسأل عن {issue}.",
        "hi": "आपको एक कानूनी स्वयंसेवक से जोड़ा जा रहा है... कृपया एक क्षण प्रतीक्षा करें। मैंने बताया है कि आप {role} हैं और {issue} के बारे में पूछ रहे हैं।",
        "id": "Menghubungkan Anda dengan relawan hukum... Mohon tunggu sebentar. Saya sudah menyampaikan bahwa Anda adalah {role} yang bertanya tentang {issue}.",
    },
    "volunteer_connected": {
        "en": "Connected with legal volunteer - You can now ask specific questions",
        "zh": "已连接法律志愿者 - 您现在可以询问具体问题",
        "vi": "Đã kết nối với tình nguyện viên pháp lý - Bây giờ bạn có thể đặt câu hỏi cụ thể",
        "ar": "متصل بمتطوع قانوني - يمكنك الآن طرح أسئلة محددة",
        "hi": "कानूनी स्वयंसेवक से जुड़े - अब आप विशिष्ट प्रश्न पूछ सकते हैं",
        "id": "Terhubung dengan relawan hukum - Sekarang Anda dapat mengajukan pertanyaan spesifik",
    },
}

ROLE_LABELS: Dict[str, Dict[str, str]] = {
    "en": {"tenant": "tenant", "landlord": "landlord", "buyer": "buyer", "seller": "seller", "unknown": "resident"},
    "zh": {"tenant": "租户", "landlord": "房东", "buyer": "买家", "seller": "卖家", "unknown": "居民"},
    "vi": {"tenant": "người thuê", "landlord": "chủ nhà", "buyer": "người mua", "seller": "người bán", "unknown": "cư dân"},
    "ar": {"tenant": "مستأجر", "landlord": "مالك", "buyer": "مشترٍ", "seller": "بائع", "unknown": "مقيم"},
    "hi": {"tenant": "किरायेदार", "landlord": "मकान मालिक", "buyer": "खरीदार", "seller": "विक्रेता", "unknown": "निवासी"},
    "id": {"tenant": "penyewa", "landlord": "pemilik", "buyer": "pembeli", "seller": "penjual", "unknown": "warga"},
}

ISSUE_LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "deposit": "a deposit", "repairs": "repairs", "eviction": "an eviction",
        "lease_break": "breaking a lease", "rent_increase": "a rent increase",
        "buying_process": "the buying process", "inspection": "an inspection",
        "contract": "a contract", "unknown": "a housing matter",
    },
    "zh": {
        "deposit": "押金", "repairs": "维修", "eviction": "驱逐", "lease_break": "提前解约",
        "rent_increase": "涨租", "buying_process": "购房流程", "inspection": "验房",
        "contract": "合同", "unknown": "住房",
    },
    "vi": {
        "deposit": "tiền đặt cọc", "repairs": "sửa chữa", "eviction": "trục xuất",
        "lease_break": "chấm dứt hợp đồng thuê", "rent_increase": "tăng tiền thuê",
        "buying_process": "quy trình mua nhà", "inspection": "kiểm tra nhà",
        "contract": "hợp đồng", "unknown": "vấn đề nhà ở",
    },
    "ar": {
        "deposit": "الوديعة", "repairs": "الإصلاحات", "eviction": "الإخلاء",
        "lease_break": "إنهاء عقد الإيجار", "rent_increase": "زيادة الإيجار",
        "buying_process": "عملية الشراء", "inspection": "الفحص",
        "contract": "العقد", "unknown": "مسألة سكنية",
    },
    "hi": {
        "deposit": "जमा राशि", "repairs": "मरम्मत", "eviction": "बेदखली",
        "lease_break": "पट्टा तोड़ना", "rent_increase": "किराया वृद्धि",
        "buying_process": "खरीद प्रक्रिया", "inspection": "निरीक्षण",
        "contract": "अनुबंध", "unknown": "आवास मामला",
    },
    "id": {
        "deposit": "deposit", "repairs": "perbaikan", "eviction": "penggusuran",
        "lease_break": "pemutusan sewa", "rent_increase": "kenaikan sewa",
        "buying_process": "proses pembelian", "inspection": "inspeksi",
        "contract": "kontrak", "unknown": "masalah perumahan",
    },
}

QUICK_QUESTIONS: Dict[str, List[str]] = {
    "en": [
        "How do I break a lease?",
        "What are my rights as a tenant?",
        "How much can landlord increase rent?",
        "What should I check before buying?",
        "How do security deposits work?",
    ],
    "zh": ["如何终止租约？", "作为租户我有什么权利？", "房东可以涨多少租金？", "买房前应该检查什么？", "押金如何运作？"],
    "vi": [
        "Làm thế nào để hủy hợp đồng thuê?",
        "Quyền của tôi là gì với tư cách là người thuê?",
        "Chủ nhà có thể tăng giá thuê bao nhiêu?",
        "Tôi nên kiểm tra gì trước khi mua?",
        "Tiền đặt cọc hoạt động như thế nào?",
    ],
    "ar": [
        "كيف يمكنني إنهاء عقد الإيجار؟",
        "ما هي حقوقي كمستأجر؟",
        "كم يمكن للمالك زيادة الإيجار؟",
        "ماذا يجب أن أتحقق منه قبل الشراء؟",
        "كيف تعمل الودائع الأمنية؟",
    ],
    "hi": [
        "मैं पट्टा कैसे तोड़ूं?",
        "किरायेदार के रूप में मेरे क्या अधिकार हैं?",
        "मकान मालिक कितना किराया बढ़ा सकता है?",
        "खरीदने से पहले मुझे क्या जांचना चाहिए?",
        "सिक्योरिटी डिपॉजिट कैसे काम करता है?",
    ],
    "id": [
        "Bagaimana cara membatalkan sewa?",
        "Apa hak saya sebagai penyewa?",
        "Berapa banyak pemilik dapat menaikkan sewa?",
        "Apa yang harus saya periksa sebelum membeli?",
        "Bagaimana cara kerja deposit keamanan?",
    ],
}


def normalize_language(language: str) -> str:
    """Map anything outside SUPPORTED_LANGUAGES to English."""
    if language in SUPPORTED_LANGUAGES:
        return language
    return DEFAULT_LANGUAGE


def translate(key: str, language: str, **fmt) -> str:
    texts = MESSAGES[key]
    text = texts.get(normalize_language(language), texts[DEFAULT_LANGUAGE])
    return text.format(**fmt) if fmt else text


def role_label(role: str, language: str) -> str:
    labels = ROLE_LABELS[normalize_language(language)]
    return labels.get(role, labels["unknown"])


def issue_label(issue_type: str, language: str) -> str:
    labels = ISSUE_LABELS[normalize_language(language)]
    return labels.get(issue_type, labels["unknown"])


def quick_questions(language: str) -> List[str]:
    return list(QUICK_QUESTIONS[normalize_language(language)])
