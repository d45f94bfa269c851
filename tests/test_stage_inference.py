"""Tests for conversation signals and the stage resolver."""

import re
import unittest

from chatbot.detection.detectors import extract_intent
from chatbot.inference import (
    collect_signals,
    needs_content_fetch,
    pick_discovery_template,
    previous_assistant_message,
    resolve_stage,
)
from chatbot.state import ConversationSignals, StagePolicy
from prompts.prompt import TEMPLATE_INSTRUCTIONS, build_turn_prompt


def user(text):
    return {"role": "user", "content": text}


def assistant(text):
    return {"role": "assistant", "content": text}


def resolve(history, message, *, has_content=False, policy=None):
    signals = collect_signals([*history, user(message)])
    intent = extract_intent(message).intent
    return resolve_stage(
        history, message, intent=intent, has_content=has_content, signals=signals, policy=policy
    )


class SignalCollectionTests(unittest.TestCase):
    def test_signals_collected_from_user_messages(self) -> None:
        signals = collect_signals(
            [
                user("I need a website for my business"),
                user("login and payment feature"),
                user("budget around $2000"),
            ]
        )
        self.assertTrue(signals.mentioned_project_type)
        self.assertTrue(signals.mentioned_features)
        self.assertTrue(signals.mentioned_budget)
        self.assertFalse(signals.mentioned_timeline)
        self.assertEqual(signals.details_collected(), 3)

    def test_assistant_turns_are_ignored(self) -> None:
        signals = collect_signals([assistant("What is your budget and timeline for the website?")])
        self.assertFalse(signals.any_detail)

    def test_merged_budget_and_timeline_count_once(self) -> None:
        signals = ConversationSignals(mentioned_budget=True, mentioned_timeline=True)
        self.assertEqual(signals.details_collected(), 2)
        self.assertEqual(signals.details_collected(merge_budget_timeline=True), 1)

    def test_details_collected_is_monotonic(self) -> None:
        messages = [
            user("hello"),
            user("I want a mobile app"),
            user("nothing new here"),
            user("it needs notifications and booking"),
            user("we want to launch in two months"),
            user("our goal is more customers"),
        ]
        counts = [collect_signals(messages[: index + 1]).details_collected() for index in range(len(messages))]
        self.assertEqual(counts, sorted(counts))
        self.assertEqual(counts[-1], 4)


class DiscoveryTemplateTests(unittest.TestCase):
    def test_asks_project_type_first(self) -> None:
        self.assertEqual(pick_discovery_template(ConversationSignals()), "ask_project_type")

    def test_asks_features_after_project_type(self) -> None:
        signals = ConversationSignals(mentioned_project_type=True)
        self.assertEqual(pick_discovery_template(signals), "ask_features")

    def test_asks_budget_timeline_after_features(self) -> None:
        signals = ConversationSignals(mentioned_project_type=True, mentioned_features=True)
        self.assertEqual(pick_discovery_template(signals), "ask_budget_timeline")

    def test_keep_discovering_when_everything_known(self) -> None:
        signals = ConversationSignals(
            mentioned_project_type=True, mentioned_features=True, mentioned_budget=True, mentioned_timeline=True
        )
        self.assertEqual(pick_discovery_template(signals), "keep_discovering")


class StageResolverTests(unittest.TestCase):
    def test_scenario_greeting(self) -> None:
        decision = resolve([], "Hello")
        self.assertFalse(decision.needs_content_fetch)
        self.assertEqual(decision.stage_label, "greeting")
        self.assertEqual(decision.prompt_template, "greeting")

    def test_greeting_suppresses_loose_keyword_fetch(self) -> None:
        self.assertFalse(needs_content_fetch([], "hi, show me", "general"))
        decision = resolve([], "hi, show me", has_content=True)
        self.assertEqual(decision.stage_label, "greeting")
        self.assertFalse(decision.needs_content_fetch)

    def test_greeting_guard_only_on_first_turn(self) -> None:
        decision = resolve([user("I want a website"), assistant("Great! What features?")], "hello")
        self.assertNotEqual(decision.stage_label, "greeting")

    def test_scenario_list_projects(self) -> None:
        self.assertEqual(extract_intent("show me your projects").intent, "listAll")
        self.assertTrue(needs_content_fetch([], "show me your projects", "listAll"))
        decision = resolve([], "show me your projects", has_content=True)
        self.assertTrue(decision.needs_content_fetch)
        self.assertEqual(decision.stage_label, "showing_projects")
        self.assertEqual(decision.prompt_template, "show_projects")

    def test_loose_keyword_requests_content(self) -> None:
        self.assertTrue(needs_content_fetch([user("hey")], "can you display something", "general"))

    def test_fetched_but_empty_goes_to_no_match(self) -> None:
        decision = resolve([], "show me your projects", has_content=False)
        self.assertTrue(decision.needs_content_fetch)
        self.assertEqual(decision.stage_label, "discovery")
        self.assertEqual(decision.prompt_template, "no_match")

    def test_pricing_and_team_labels(self) -> None:
        self.assertEqual(resolve([], "What are your prices?", has_content=True).stage_label, "pricing_info")
        self.assertEqual(resolve([], "Tell me about your team", has_content=True).stage_label, "team_info")
        self.assertEqual(resolve([], "What services do you offer?", has_content=True).stage_label, "showing_info")

    def test_pricing_without_data_never_carries_numbers(self) -> None:
        message = "how much does a website cost?"
        decision = resolve([], message, has_content=False)
        self.assertEqual(decision.stage_label, "pricing_info")
        self.assertEqual(decision.prompt_template, "pricing_unavailable")
        self.assertIsNone(re.search(r"\d", TEMPLATE_INSTRUCTIONS["pricing_unavailable"]))
        prompt = build_turn_prompt(decision.prompt_template, message, [], content=None)
        self.assertIsNone(re.search(r"\d", prompt))

    def test_scenario_enough_details_asks_permission(self) -> None:
        history = [
            user("I need a website for my business"),
            user("login and payment feature"),
            user("budget around $2000"),
        ]
        decision = resolve(history, "what's next?")
        self.assertGreaterEqual(collect_signals(history).details_collected(), 2)
        self.assertEqual(decision.stage_label, "ask_for_contact_permission")
        self.assertEqual(decision.prompt_template, "ask_permission")
        self.assertFalse(decision.needs_content_fetch)

    def test_scenario_agreement_after_solicitation(self) -> None:
        history = [
            user("I need an online store with payments"),
            assistant("Sounds great! Shall I get your contact details so the team can send a proposal?"),
        ]
        decision = resolve(history, "yes let's do it")
        self.assertEqual(decision.stage_label, "ready_for_contact")
        self.assertEqual(decision.prompt_template, "contact_ready")
        self.assertTrue(decision.user_agreed)

    def test_bare_yes_without_solicitation_never_reaches_contact(self) -> None:
        self.assertNotEqual(resolve([], "yes").stage_label, "ready_for_contact")
        history = [user("I want a website"), assistant("Great! What features do you need?")]
        self.assertNotEqual(resolve(history, "yes").stage_label, "ready_for_contact")

    def test_only_the_latest_assistant_turn_counts(self) -> None:
        history = [
            user("I want a website"),
            assistant("Would you like to share your contact details?"),
            user("not now, what about features"),
            assistant("Sure! Which features matter most?"),
        ]
        self.assertEqual(previous_assistant_message(history), "Sure! Which features matter most?")
        self.assertNotEqual(resolve(history, "yes").stage_label, "ready_for_contact")

    def test_direct_contact_request_needs_a_signal(self) -> None:
        decision = resolve([user("I need a mobile app")], "How can I contact you?")
        self.assertEqual(decision.stage_label, "ready_for_contact")

        decision = resolve([], "How can I contact you?")
        self.assertEqual(decision.stage_label, "discovery")

    def test_awaiting_confirmation_after_unanswered_solicitation(self) -> None:
        history = [
            user("I want an online store with payments"),
            assistant("Would you like to share your contact details so we can send a proposal?"),
        ]
        decision = resolve(history, "maybe later, still thinking")
        self.assertEqual(decision.stage_label, "awaiting_confirmation")
        self.assertFalse(decision.user_agreed)

    def test_declining_after_solicitation_keeps_the_form_closed(self) -> None:
        history = [
            user("I need an online store with payments"),
            assistant("Would you like to share your contact details so we can send a proposal?"),
        ]
        for reply in ["I'm not sure yet", "no, not ok for now", "pas d'accord", "no thanks"]:
            decision = resolve(history, reply)
            self.assertEqual(decision.stage_label, "awaiting_confirmation", reply)
            self.assertFalse(decision.user_agreed, reply)

    def test_affirmation_without_solicitation_is_not_agreement(self) -> None:
        decision = resolve([user("I want a website"), assistant("Great! What features do you need?")], "ok")
        self.assertFalse(decision.user_agreed)
        self.assertNotEqual(decision.stage_label, "ready_for_contact")

    def test_contact_request_beats_team_intent(self) -> None:
        history = [user("mobile app with booking")]
        message = "What's the best way to reach your team?"
        self.assertFalse(needs_content_fetch(history, message, extract_intent(message).intent))
        decision = resolve(history, message, has_content=True)
        self.assertEqual(decision.stage_label, "ready_for_contact")
        self.assertFalse(decision.needs_content_fetch)

    def test_agreement_beats_data_intents(self) -> None:
        history = [
            user("mobile app with booking"),
            assistant("Shall I get your contact details so we can prepare a proposal?"),
        ]
        for message in ["yes, have your team contact me", "Sure, send me a quote"]:
            self.assertFalse(needs_content_fetch(history, message, extract_intent(message).intent), message)
            decision = resolve(history, message, has_content=True)
            self.assertEqual(decision.stage_label, "ready_for_contact", message)
            self.assertEqual(decision.prompt_template, "contact_ready", message)
            self.assertTrue(decision.user_agreed, message)

    def test_threshold_is_configurable(self) -> None:
        history = [user("I need a website for my business"), user("login and payment feature")]
        self.assertEqual(resolve(history, "ok then").stage_label, "ask_for_contact_permission")
        strict = StagePolicy(details_threshold=3)
        decision = resolve(history, "ok then", policy=strict)
        self.assertEqual(decision.stage_label, "discovery")
        self.assertEqual(decision.prompt_template, "ask_budget_timeline")

    def test_discovery_asks_for_features_after_project_type(self) -> None:
        decision = resolve([], "I'd like a mobile app")
        self.assertEqual(decision.stage_label, "discovery")
        self.assertEqual(decision.prompt_template, "ask_features")

    def test_resolver_is_deterministic(self) -> None:
        history = [user("I need a website"), assistant("What features?")]
        signals = collect_signals(history)
        first = resolve_stage(history, "login please", intent="general", has_content=False, signals=signals)
        second = resolve_stage(history, "login please", intent="general", has_content=False, signals=signals)
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
