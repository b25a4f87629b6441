import logging
import re
from datetime import datetime
from typing import Callable, Dict, List, Optional

from google import genai
from groq import Groq

from .keywords import contains_any, vocabulary
from .models import AIResponse, utcnow
from .translations import LANGUAGE_NAMES, normalize_language, translate

logger = logging.getLogger(__name__)

MAX_ACTIONS = 5
MIN_ACTION_LENGTH = 10
PROMPT_HISTORY_TURNS = 3

LOW_CONFIDENCE_PHRASES = (
    "i'm specialized in housing",
    "not confident",
    "consult a qualified attorney",
    "varies significantly by location",
    "complex legal matter",
)

MEDIUM_CONFIDENCE_PHRASES = (
    "typically",
    "generally",
    "in most jurisdictions",
    "may vary",
    "usually",
    "often",
)

ACTION_LINE = re.compile(r"^(?:\d+[.)]|[a-zA-Z][.)]\s|[-•*]\s)")
ACTION_PREFIX = re.compile(r"^(?:\d+[.)]|[a-zA-Z][.)](?=\s)|[-•*](?=\s))\s*")


class GeminiCompletion:
    """Single-shot text completion against the Gemini API (google-genai)."""

    def __init__(self, api_key: Optional[str], model_name: str = "gemini-2.5-flash"):
        self.api_key = api_key
        self.model_name = model_name
        self._client = None

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise ValueError("GEMINI_API_KEY is not set")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def __call__(self, prompt: str) -> str:
        response = self.client.models.generate_content(model=self.model_name, contents=prompt)
        return response.text or ""


class GroqCompletion:
    """Single-shot text completion against Groq chat completions."""

    def __init__(self, api_key: Optional[str], model_name: str = "llama-3.3-70b-versatile"):
        self.api_key = api_key
        self.model_name = model_name
        self._client = None

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise ValueError("GROQ_API_KEY is not set")
            self._client = Groq(api_key=self.api_key)
        return self._client

    def __call__(self, prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model_name,
            messages=[
                {"role": "system", "content": "You are a Legal Housing Assistant."},
                {"role": "user", "content": prompt},
            ],
            temperature=0.2,
        )
        return response.choices[0].message.content or ""


def build_completion_backend(config: Dict) -> Callable[[str], str]:
    """Pick the completion backend named by LLM_PROVIDER."""
    provider = (config.get("LLM_PROVIDER") or "gemini").lower()
    if provider == "groq":
        return GroqCompletion(config.get("GROQ_API_KEY"), config.get("GROQ_MODEL") or "llama-3.3-70b-versatile")
    if provider != "gemini":
        logger.warning(f"Unknown LLM_PROVIDER '{provider}', using gemini")
    return GeminiCompletion(config.get("GEMINI_API_KEY"), config.get("GEMINI_MODEL") or "gemini-2.5-flash")


class LegalHousingAI:
    """
    Gateway between the chat and the hosted language model.
    Builds the prompt, makes one completion call and scores the reply.
    Never raises: every failure becomes the localized fallback response.
    """

    def __init__(self, completion: Callable[[str], str], clock: Callable[[], datetime] = utcnow):
        self.completion = completion
        self.clock = clock

    def get_response(self, user_message: str, context: Dict) -> AIResponse:
        language = normalize_language(context.get("language", "en"))
        prompt = f"{self.build_prompt(context)}\n\nUser Question: {user_message}"

        try:
            text = self.completion(prompt)
            if not text or not text.strip():
                raise ValueError("Empty response from AI")

            return AIResponse(
                content=text,
                confidence=self.assess_confidence(text),
                is_housing_related=self.check_housing_relevance(user_message, language),
                suggested_actions=self.extract_actions(text),
                requires_urgent_action=self.check_urgency(text, user_message, language),
            )
        except Exception as e:
            logger.error(f"AI completion failed: {e}")
            return self.fallback_response(language)

    def fallback_response(self, language: str) -> AIResponse:
        return AIResponse(
            content=translate("fallback", language),
            confidence="low",
            is_housing_related=True,
            suggested_actions=[],
            requires_urgent_action=False,
        )

    def build_prompt(self, context: Dict) -> str:
        language = normalize_language(context.get("language", "en"))
        history = list(context.get("conversation_history") or [])[-PROMPT_HISTORY_TURNS:]
        recent = " → ".join(history) if history else "None"
        now = self.clock().strftime("%Y-%m-%d %H:%M:%S")
        started = context.get("session_started") or now

        return f"""You are a specialized Legal Housing Assistant AI for the WARM-HOME app.
Current Date and Time (UTC): {now}
Session Started: {started}

SCOPE: You ONLY provide advice about housing and property legal matters:
- Tenant rights and landlord-tenant law
- Property buying, selling, and real estate transactions
- Housing laws, regulations, and compliance
- Lease agreements, evictions, and rental disputes
- Property repairs, maintenance, and habitability
- Security deposits, rent control, and housing discrimination
- Home inspections, contracts, and closing processes

CURRENT USER CONTEXT:
- Role: {context.get("role", "unknown")} (tenant/landlord/buyer/seller)
- Issue Type: {context.get("issue_type", "unknown")}
- Urgency Level: {context.get("urgency", "low")}
- Language: {LANGUAGE_NAMES[language]}
- Recent conversation: {recent}

RESPONSE RULES:
1. Off-topic questions: If NOT about housing/property law, respond exactly: "I'm specialized in housing and property legal matters only. Please ask about tenant rights, landlord issues, buying/selling property, leases, evictions, repairs, deposits, or related housing law topics."
2. Role-specific advice:
   - Tenant: focus on tenant rights, protections, remedies
   - Landlord: focus on legal obligations, proper procedures
   - Buyer: focus on purchase process, inspections, contracts
   - Seller: focus on disclosure requirements, legal obligations
3. Urgency handling:
   - HIGH urgency: provide immediate action steps, mention contacting authorities
   - MEDIUM urgency: provide structured guidance with timelines
   - LOW urgency: provide comprehensive educational information
4. Language: respond in {LANGUAGE_NAMES[language]} naturally.
5. End with an appropriate legal disclaimer for serious matters.
6. When laws vary by location, say so and suggest checking local regulations.

FORMAT YOUR RESPONSE:
- Start with a direct answer to the question
- Provide numbered action steps if applicable
- Include relevant warnings or urgent considerations
- End with an appropriate legal disclaimer"""

    @staticmethod
    def assess_confidence(response: str) -> str:
        if not response or not response.strip():
            return "low"
        if contains_any(response, LOW_CONFIDENCE_PHRASES):
            return "low"
        if contains_any(response, MEDIUM_CONFIDENCE_PHRASES):
            return "medium"
        return "high"

    @staticmethod
    def check_housing_relevance(message: str, language: str = "en") -> bool:
        if not message or not message.strip():
            return False
        return contains_any(message, vocabulary(language, "housing"))

    @staticmethod
    def extract_actions(response: str) -> List[str]:
        if not response or not response.strip():
            return []

        actions = []
        for raw_line in response.split("\n"):
            line = raw_line.strip()
            if ACTION_LINE.match(line) or "Step" in line or "Action:" in line:
                action = ACTION_PREFIX.sub("", line).strip()
                if len(action) > MIN_ACTION_LENGTH:
                    actions.append(action)
        return actions[:MAX_ACTIONS]

    @staticmethod
    def check_urgency(response: str, user_message: str, language: str = "en") -> bool:
        if not response or not user_message:
            return False
        return contains_any(f"{response} {user_message}", vocabulary(language, "urgent"))
