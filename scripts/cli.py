"""CLI entry point for chatting with the assistant from a terminal."""

from __future__ import annotations

import logging
from typing import Dict, List

from chatbot.agent import ChatAgent
from chatbot.config import load_app_config
from chatbot.diagnostics import run_content_sanity_check
from chatbot.errors import GenerationError


def build_agent() -> ChatAgent:
    config = load_app_config()
    logging.basicConfig(level=config.log_level)
    agent = ChatAgent.from_config(config)
    if agent.content_store is not None:
        run_content_sanity_check(agent.content_store)
    return agent


def main() -> None:
    agent = build_agent()
    history: List[Dict[str, str]] = []
    print("Tell me about the project you have in mind. (Type 'exit' or 'quit' to stop.)")
    while True:
        try:
            user_text = input("You: ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
            break

        if not user_text:
            continue

        if user_text.lower() in {"exit", "quit"}:
            print("Goodbye!")
            break

        try:
            result = agent.respond(user_text, history)
        except GenerationError as exc:
            print(f"[Error contacting chat model: {exc.message}]")
            continue

        stage = result.metadata.get("conversationStage") if result.metadata else "-"
        print(f"Assistant: {result.reply}\n[stage: {stage}]\n")
        history.append({"role": "user", "content": user_text})
        history.append({"role": "assistant", "content": result.reply})


if __name__ == "__main__":
    main()
