"""Detection module for language, intent, service type, and contact-flow cues.

Import directly from detection.detectors:
    from chatbot.detection.detectors import detect_language, extract_intent
"""
