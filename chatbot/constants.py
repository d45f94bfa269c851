"""Constants, catalogs, keyword lists, and canned replies for the chat assistant."""

# Supported languages, in detection priority order
LANGUAGES = ("ar", "fr", "en")
DEFAULT_LANGUAGE = "en"

# Intents, in the priority order the extractor evaluates them
INTENT_PRICING = "pricing"
INTENT_TEAM = "team"
INTENT_SERVICES = "services"
INTENT_EXAMPLES = "examples"
INTENT_FEATURED = "featured"
INTENT_LIST_ALL = "listAll"
INTENT_CATEGORY = "category"
INTENT_DETAILS = "details"
INTENT_SEARCH = "search"
INTENT_GENERAL = "general"

INTENTS = (
    INTENT_PRICING,
    INTENT_TEAM,
    INTENT_SERVICES,
    INTENT_EXAMPLES,
    INTENT_FEATURED,
    INTENT_LIST_ALL,
    INTENT_CATEGORY,
    INTENT_DETAILS,
    INTENT_SEARCH,
    INTENT_GENERAL,
)

DATA_INTENTS = frozenset(INTENTS) - {INTENT_GENERAL}

# Conversation stage labels
STAGE_GREETING = "greeting"
STAGE_DISCOVERY = "discovery"
STAGE_SHOWING_PROJECTS = "showing_projects"
STAGE_SHOWING_INFO = "showing_info"
STAGE_PRICING_INFO = "pricing_info"
STAGE_TEAM_INFO = "team_info"
STAGE_ASK_PERMISSION = "ask_for_contact_permission"
STAGE_READY_FOR_CONTACT = "ready_for_contact"
STAGE_AWAITING_CONFIRMATION = "awaiting_confirmation"

# Prompt templates handed to the generation service
TEMPLATE_GREETING = "greeting"
TEMPLATE_SHOW_PROJECTS = "show_projects"
TEMPLATE_SHOW_SERVICES = "show_services"
TEMPLATE_SHOW_PRICING = "show_pricing"
TEMPLATE_SHOW_TEAM = "show_team"
TEMPLATE_NO_MATCH = "no_match"
TEMPLATE_PRICING_UNAVAILABLE = "pricing_unavailable"
TEMPLATE_CONTACT_READY = "contact_ready"
TEMPLATE_ASK_PERMISSION = "ask_permission"
TEMPLATE_AWAITING_CONFIRMATION = "awaiting_confirmation"
TEMPLATE_ASK_PROJECT_TYPE = "ask_project_type"
TEMPLATE_ASK_FEATURES = "ask_features"
TEMPLATE_ASK_BUDGET_TIMELINE = "ask_budget_timeline"
TEMPLATE_KEEP_DISCOVERING = "keep_discovering"

# Service catalog, in the order the classifier evaluates it
SERVICE_ECOMMERCE = "E-commerce"
SERVICE_MOBILE_APP = "Mobile App Development"
SERVICE_AI_AUTOMATION = "Artificial Intelligence & Automation"
SERVICE_UI_UX = "UI/UX Design"
SERVICE_CUSTOM_SOFTWARE = "Custom Software"
SERVICE_WEBSITES = "Professional Websites"

SERVICE_CATALOG = (
    SERVICE_ECOMMERCE,
    SERVICE_MOBILE_APP,
    SERVICE_AI_AUTOMATION,
    SERVICE_CUSTOM_SOFTWARE,
    SERVICE_WEBSITES,
    SERVICE_UI_UX,
)

# First matching substring wins
SERVICE_EMOJIS = (
    ("commerce", "🛒"),
    ("shop", "🛒"),
    ("mobile", "📱"),
    ("app", "📱"),
    ("intelligence", "🤖"),
    ("automation", "🤖"),
    ("ai", "🤖"),
    ("design", "🎨"),
    ("ui", "🎨"),
    ("software", "💻"),
    ("web", "🌐"),
    ("site", "🌐"),
)
DEFAULT_SERVICE_EMOJI = "✨"

DEFAULT_SERVICE_DESCRIPTIONS = {
    SERVICE_ECOMMERCE: "Online stores with payments, catalogs and order management.",
    SERVICE_MOBILE_APP: "Native and cross-platform apps for iOS and Android.",
    SERVICE_AI_AUTOMATION: "Chatbots, AI assistants and workflow automation.",
    SERVICE_UI_UX: "Interfaces and user experiences that convert.",
    SERVICE_CUSTOM_SOFTWARE: "Tailored business platforms, dashboards and internal tools.",
    SERVICE_WEBSITES: "Fast, modern websites for businesses and brands.",
}

# Stop words dropped by the fallback keyword extraction
STOP_WORDS = frozenset(
    {
        # en
        "the", "a", "an", "is", "are", "what", "how", "tell", "me", "about",
        "you", "your", "can", "could", "would", "please", "and", "for", "with",
        "have", "has", "do", "does", "any", "some", "want", "need",
        # fr
        "le", "la", "les", "un", "une", "des", "est", "sont", "quoi", "comment",
        "vous", "votre", "vos", "pour", "avec", "sur", "dans", "moi",
        # ar
        "ما", "هو", "هي", "عن", "في", "من", "على", "هل", "لي", "أنا",
    }
)

# Loose nouns that request catalog data even without a structured intent
DATA_REQUEST_KEYWORDS = [
    "show",
    "display",
    "example",
    "examples",
    "portfolio",
    "service",
    "services",
    "team",
    "projects",
    "voir",
    "afficher",
    "exemple",
    "exemples",
    "équipe",
    "عرض",
    "أمثلة",
    "مشاريع",
    "خدمات",
    "فريق",
]

# Formatting limits
CONTENT_TRUNCATE_CHARS = 500
MIN_KEYWORD_TOKEN_LENGTH = 3

# Result caps per query shape
LIST_LIMIT = 8
FEATURED_LIMIT = 4
CATEGORY_LIMIT = 5
SEARCH_LIMIT = 4
GENERAL_LIMIT = 6

# Localized canned replies
EMPTY_MESSAGE_REPLIES = {
    "en": "Please provide a message.",
    "fr": "Veuillez écrire un message.",
    "ar": "الرجاء كتابة رسالة.",
}

ERROR_REPLIES = {
    "en": "Sorry, something went wrong. Please try again.",
    "fr": "Désolé, une erreur s'est produite. Veuillez réessayer.",
    "ar": "عذراً، حدث خطأ. الرجاء المحاولة مرة أخرى.",
}

CONTACT_RECEIVED_MESSAGE = "Contact information received successfully"

# Stop sequences that keep the model from inventing the user's next turn
GENERATION_STOP_SEQUENCES = ["\nUser:", "User's latest message:", "\n\n\n"]
