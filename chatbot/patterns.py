"""Compiled regular expressions for language, intent, service, and signal detection."""

import re
from typing import List, Pattern, Tuple

from .constants import (
    DATA_REQUEST_KEYWORDS,
    INTENT_CATEGORY,
    INTENT_DETAILS,
    INTENT_EXAMPLES,
    INTENT_FEATURED,
    INTENT_LIST_ALL,
    INTENT_PRICING,
    INTENT_SEARCH,
    INTENT_SERVICES,
    INTENT_TEAM,
    SERVICE_AI_AUTOMATION,
    SERVICE_CUSTOM_SOFTWARE,
    SERVICE_ECOMMERCE,
    SERVICE_MOBILE_APP,
    SERVICE_UI_UX,
    SERVICE_WEBSITES,
)

# Language detection
ARABIC_SCRIPT_PATTERN = re.compile(r"[\u0600-\u06FF]")

FRENCH_WORDS = [
    "le",
    "la",
    "les",
    "un",
    "une",
    "des",
    "du",
    "je",
    "nous",
    "vous",
    "bonjour",
    "bonsoir",
    "salut",
    "merci",
    "projet",
    "projets",
    "travail",
    "prix",
    "combien",
    "équipe",
    "besoin",
    "voudrais",
    "cherche",
    "oui",
    "pourquoi",
    "quel",
    "quelle",
]
FRENCH_WORD_PATTERN = re.compile(r"\b(?:" + "|".join(FRENCH_WORDS) + r")\b", re.IGNORECASE)

# Intent extraction: (intent, pattern) pairs in priority order.
# Group 1 is the trigger word; group 2, when present, is the specific keyword.
INTENT_PATTERNS: List[Tuple[str, Pattern]] = [
    (
        INTENT_PRICING,
        re.compile(
            r"\b(prices?|pricing|costs?|how much|quotes?|rates?|packages?|tarifs?|prix|co[uû]ts?|combien|devis|forfaits?"
            r"|سعر|أسعار|الأسعار|تكلفة|كم)\b",
            re.IGNORECASE,
        ),
    ),
    (
        INTENT_TEAM,
        re.compile(
            r"\b(team|about (?:you|us|your company)|who are you|who is behind|your company"
            r"|équipe|qui êtes[- ]vous|à propos|فريق|الفريق|من أنتم|من نحن)\b",
            re.IGNORECASE,
        ),
    ),
    (
        INTENT_SERVICES,
        re.compile(
            r"\b(services?|what do you (?:do|offer)|what you offer|offerings"
            r"|prestations?|que faites[- ]vous|خدمات|خدماتكم|ماذا تقدمون)\b",
            re.IGNORECASE,
        ),
    ),
    (
        INTENT_EXAMPLES,
        re.compile(
            r"\b(examples?|samples?|case stud(?:y|ies)|what have you (?:built|made|done)|your (?:work|portfolio)|portfolio"
            r"|exemples?|réalisations?|أمثلة|مثال|أعمالكم)\b",
            re.IGNORECASE,
        ),
    ),
    (
        INTENT_FEATURED,
        re.compile(
            r"\b(featured|important|highlights?|phares?|مميز|مميزة"
            r"|(?:best|top|meilleure?s?|أفضل)(?=(?:\s+\w+){0,2}?\s+(?:projects?|works?|projets?|réalisations?|مشاريع|أعمال)))\b",
            re.IGNORECASE,
        ),
    ),
    (
        INTENT_LIST_ALL,
        re.compile(
            r"\b(show|list|all|display|see|view|voir|afficher|montrez|montre|عرض|اعرض|أرني)\b"
            r"(?:\s+\w+){0,3}?\s+(projects?|works?|projets?|travaux|مشاريع|المشاريع|مشروع)\b",
            re.IGNORECASE,
        ),
    ),
    (
        INTENT_CATEGORY,
        re.compile(
            r"\b(category|categorie|catégorie|فئة|نوع)\s*[:=]?\s*(\w[\w\s-]*)",
            re.IGNORECASE,
        ),
    ),
    (
        INTENT_DETAILS,
        re.compile(
            r"\b(details?|info|information|détails?|informations?|تفاصيل|معلومات)\b"
            r"\s*(?:about|on|of|sur|de|du|عن)?\s*(\w[\w\s-]*)?",
            re.IGNORECASE,
        ),
    ),
    (
        INTENT_SEARCH,
        re.compile(
            r"\b(find|search|chercher|cherche|recherche|بحث|ابحث)\b"
            r"\s*(?:for|about|sur|عن)?\s*(\w[\w\s-]*)?",
            re.IGNORECASE,
        ),
    ),
]

# Service-type classification: (service, patterns) pairs in priority order
SERVICE_PATTERNS: List[Tuple[str, List[Pattern]]] = [
    (
        SERVICE_ECOMMERCE,
        [
            re.compile(r"\be-?commerce\b", re.IGNORECASE),
            re.compile(r"\b(online (?:store|shop)|web ?shop|boutique en ligne|vente en ligne|magasin en ligne)\b", re.IGNORECASE),
            re.compile(r"(متجر|تجارة إلكترونية|التجارة الإلكترونية)"),
        ],
    ),
    (
        SERVICE_MOBILE_APP,
        [
            re.compile(r"\b(mobile|android|ios|iphone)\b", re.IGNORECASE),
            re.compile(r"\b(?<!web )apps?\b", re.IGNORECASE),
            re.compile(r"\b(applications? mobiles?)\b", re.IGNORECASE),
            re.compile(r"(تطبيق|تطبيقات|جوال)"),
        ],
    ),
    (
        SERVICE_AI_AUTOMATION,
        [
            re.compile(r"\b(ai|artificial intelligence|chat ?bots?|automation|automate|machine learning|gpt|llm)\b", re.IGNORECASE),
            re.compile(r"\b(intelligence artificielle|ia|automatisation)\b", re.IGNORECASE),
            re.compile(r"(ذكاء اصطناعي|الذكاء الاصطناعي|روبوت محادثة|أتمتة)"),
        ],
    ),
    (
        SERVICE_CUSTOM_SOFTWARE,
        [
            re.compile(r"\b(custom software|software|saas|erp|crm|dashboard|web app|web application|internal tools?)\b", re.IGNORECASE),
            re.compile(r"\b(logiciels?|sur mesure)\b", re.IGNORECASE),
            re.compile(r"(برنامج|برمجيات|نظام)"),
        ],
    ),
    (
        SERVICE_WEBSITES,
        [
            re.compile(r"\b(websites?|web ?sites?|web ?design|landing pages?|site web|site internet|site vitrine|blog)\b", re.IGNORECASE),
            re.compile(r"\bsites?\b", re.IGNORECASE),
            re.compile(r"(موقع|مواقع)"),
        ],
    ),
    (
        SERVICE_UI_UX,
        [
            re.compile(r"\b(ui|ux|user interface|user experience|figma|wireframes?|mock-?ups?|prototype)\b", re.IGNORECASE),
            re.compile(r"\b(design|maquettes?|interface utilisateur)\b", re.IGNORECASE),
            re.compile(r"(تصميم|واجهة المستخدم)"),
        ],
    ),
]

# Conversation signals, scanned over every user message
PROJECT_TYPE_PATTERNS: List[Pattern] = [
    re.compile(
        r"\b(websites?|site|apps?|application|e-?commerce|online store|shop|design|blog|chat ?bot|mobile|platform|software|saas|landing page)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\b(site web|boutique|logiciel|plateforme)\b", re.IGNORECASE),
    re.compile(r"(موقع|تطبيق|متجر|منصة|برنامج)"),
]

FEATURE_PATTERNS: List[Pattern] = [
    re.compile(
        r"\b(features?|functionalit(?:y|ies)|login|sign[- ]?up|payments?|booking|dashboard|admin panel|notifications?"
        r"|multilingual|requirements?)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\b(fonctionnalit[ée]s?|paiement|connexion|réservation)\b", re.IGNORECASE),
    re.compile(r"(ميزة|ميزات|خاصية|دفع|تسجيل)"),
]

BUDGET_PATTERNS: List[Pattern] = [
    re.compile(r"\b(budget|price|pricing|cost|costs|afford|pay|paying|prix|tarif|dollars?|euros?|dinars?|dzd|usd|eur)\b", re.IGNORECASE),
    re.compile(r"[$€£]\s?\d|\d\s?[$€£]"),
    re.compile(r"(ميزانية|سعر|تكلفة|دينار)"),
]

TIMELINE_PATTERNS: List[Pattern] = [
    re.compile(r"\b(timeline|deadline|launch|urgent|urgently|quickly|asap|soon|weeks?|months?)\b", re.IGNORECASE),
    re.compile(r"\b(délais?|date limite|lancement|rapidement|semaines?|mois)\b", re.IGNORECASE),
    re.compile(r"(موعد|مدة|عاجل|أسبوع|شهر)"),
]

GOAL_PATTERNS: List[Pattern] = [
    re.compile(
        r"\b(goals?|objectives?|grow|increase|boost|sell more|more (?:clients|customers|sales)|audience|brand awareness|leads)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\b(objectifs?|augmenter|développer|clients)\b", re.IGNORECASE),
    re.compile(r"(هدف|أهداف|زيادة|عملاء)"),
]

# Greeting guard
GREETING_WORDS = (
    r"hello|hi|hey|hiya|good (?:morning|afternoon|evening)|greetings"
    r"|bonjour|bonsoir|salut|coucou|مرحبا|مرحباً|السلام عليكم|السلام|أهلا|اهلا"
)
GREETING_PATTERN = re.compile(r"\b(?:" + GREETING_WORDS + r")\b", re.IGNORECASE)
GREETING_EXACT_PATTERN = re.compile(r"\s*(?:" + GREETING_WORDS + r")(?:\s+there)?\s*[!.?,]*\s*", re.IGNORECASE)

# Contact flow
AFFIRMATION_PATTERN = re.compile(
    r"\b(yes|yeah|yep|yup|ok|okay|sure|of course|absolutely|definitely|let[’']?s do it|sounds good|perfect|great"
    r"|i[’']?m in|go ahead|proceed|let[’']?s start|let[’']?s go|please do|what[’']?s next"
    r"|oui|d[’']accord|bien sûr|volontiers|allons-y|نعم|حسنا|حسناً|موافق|أكيد|طبعا)\b",
    re.IGNORECASE,
)

NEGATION_PATTERN = re.compile(
    r"(?<!why )(?<!pourquoi )\b(no|not|nope|never|don[’']?t|do not|non|pas|jamais|لا|ليس)\b"
    r"(?!\s+(?:problem|worries|doubt|de problème|de souci))",
    re.IGNORECASE,
)

CONTACT_SOLICITATION_PATTERN = re.compile(
    r"\b(contact|e-?mail|phone|proposal|reach (?:out|you)|connect|get in touch"
    r"|coordonnées|téléphone|proposition|contacter|joindre)\b|(تواصل|التواصل|بريد|هاتف|عرض سعر)",
    re.IGNORECASE,
)

CONTACT_REQUEST_PATTERN = re.compile(
    r"\b(how (?:do|can) i (?:contact|reach|call|email)|contact (?:you|your team|us)|get in touch|reach (?:you|your team)"
    r"|talk to (?:someone|a human|your team)|your (?:email|phone|number)"
    r"|comment (?:vous )?(?:contacter|joindre)|vous contacter)\b|(كيف أتواصل|كيف اتواصل|تواصل معكم|رقم الهاتف)",
    re.IGNORECASE,
)

# Loose catalog request scan
DATA_REQUEST_PATTERN = re.compile(
    r"\b(?:" + "|".join(re.escape(keyword) for keyword in DATA_REQUEST_KEYWORDS) + r")\b",
    re.IGNORECASE,
)
