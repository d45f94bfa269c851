"""Chatbot package: classification, stage resolution, and the turn orchestrator.

Import directly from the submodules:
    from chatbot.agent import ChatAgent
    from chatbot.config import load_app_config
"""
