from WarmHome.legal_assistant.context_classifier import classify, extract_details
from WarmHome.legal_assistant.models import UserContext


def test_deposit_question_from_tenant():
    context = classify("My landlord won't return my $1200 deposit after 2 months", UserContext())

    assert context.role == "tenant"
    assert context.issue_type == "deposit"
    assert context.urgency == "low"
    assert context.specific_details == ["$1200", "2 months"]
    assert context.conversation_history == ["My landlord won't return my $1200 deposit after 2 months"]


def test_landlord_keyword_without_tenant_keyword():
    context = classify("My tenant has stopped paying and the place needs repairs", UserContext())
    assert context.role == "landlord"
    assert context.issue_type == "repairs"


def test_tenant_wins_when_both_roles_match():
    context = classify("I'm renting the flat and my tenant friend sublets", UserContext())
    assert context.role == "tenant"


def test_issue_priority_follows_order():
    context = classify("The deposit was kept because of a repair", UserContext())
    assert context.issue_type == "deposit"


def test_role_and_issue_survive_messages_without_matches():
    first = classify("My landlord wants to evict me", UserContext())
    second = classify("What should I do next?", first)

    assert second.role == "tenant"
    assert second.issue_type == "eviction"


def test_urgency_never_downgrades():
    context = classify("I got an eviction notice and it's urgent", UserContext())
    assert context.urgency == "high"

    context = classify("Thanks, also I might move soon", context)
    assert context.urgency == "high"


def test_medium_urgency_only_from_low():
    context = classify("My rent increase starts next week", UserContext())
    assert context.urgency == "medium"
    assert context.issue_type == "rent_increase"

    context = classify("ok", context)
    assert context.urgency == "medium"


def test_history_keeps_last_five():
    context = UserContext()
    for i in range(7):
        context = classify(f"message {i}", context)

    assert context.conversation_history == [f"message {i}" for i in range(2, 7)]


def test_details_capped_at_ten():
    message = " ".join(f"${i}" for i in range(1, 13))
    context = classify(message, UserContext())
    assert context.specific_details == [f"${i}" for i in range(3, 13)]


def test_repeated_detail_moves_to_end():
    context = classify("I paid $500 and waited 3 weeks", UserContext())
    context = classify("Still no sign of my $500", context)
    assert context.specific_details == ["3 weeks", "$500"]


def test_extract_details_amounts_and_timeframes():
    assert extract_details("Paid $1,500.50 rent 3 Weeks ago, then $20, after 10 days") == [
        "$1,500.50", "3 Weeks", "$20", "10 days",
    ]


def test_empty_message_only_touches_history():
    previous = classify("My landlord kept my $900 bond, urgent", UserContext())
    context = classify("", previous)

    assert context.role == previous.role
    assert context.issue_type == previous.issue_type
    assert context.urgency == previous.urgency
    assert context.specific_details == previous.specific_details
    assert context.conversation_history == previous.conversation_history + [""]


def test_previous_context_is_not_modified():
    previous = UserContext()
    classify("my landlord kept my deposit", previous)
    assert previous == UserContext()


def test_chinese_keywords():
    context = classify("我的房东不退还押金", UserContext(), "zh")
    assert context.role == "tenant"
    assert context.issue_type == "deposit"


def test_vietnamese_keywords():
    context = classify("Chủ nhà của tôi không trả tiền đặt cọc, khẩn cấp", UserContext(), "vi")
    assert context.role == "tenant"
    assert context.issue_type == "deposit"
    assert context.urgency == "high"


def test_english_keywords_still_match_in_other_languages():
    context = classify("my landlord kept the deposit", UserContext(), "zh")
    assert context.role == "tenant"
    assert context.issue_type == "deposit"


def test_unknown_language_uses_english():
    context = classify("I want to buy a house, what about the contract?", UserContext(), "fr")
    assert context.role == "buyer"
    assert context.issue_type == "contract"
