"""HTTP-level tests for the FastAPI app using TestClient and stub collaborators."""

import unittest
from unittest import mock

from fastapi.testclient import TestClient
from openai import OpenAIError

import backend.app as backend_app
from backend.app import create_app
from chatbot.config import AppConfig
from chatbot.generation import TextGenerator


class StubCompletion:
    def __init__(self, text: str) -> None:
        message = type("Msg", (), {"content": text})
        choice = type("Choice", (), {"message": message()})
        self.choices = [choice()]


class StubChatCompletions:
    def __init__(self, client: "StubClient") -> None:
        self._client = client

    def create(self, **kwargs):
        self._client.calls.append(kwargs)
        if self._client.error:
            raise self._client.error
        return StubCompletion("Stub reply")


class StubChat:
    def __init__(self, client: "StubClient") -> None:
        self.completions = StubChatCompletions(client)


class StubClient:
    def __init__(self, error=None) -> None:
        self.calls = []
        self.error = error
        self.chat = StubChat(self)


class StubStore:
    def __init__(self, result=None, configured=True) -> None:
        self.result = result
        self.configured = configured
        self.queries = []

    def fetch(self, groq):
        self.queries.append(groq)
        return self.result


class StubNotifier:
    def __init__(self, delivered=True, configured=True) -> None:
        self.delivered = delivered
        self.configured = configured
        self.messages = []

    def notify(self, message: str) -> bool:
        self.messages.append(message)
        return self.delivered


class ApiTestCase(unittest.TestCase):
    def make_client(self, *, config=None, store_result=None, error=None, delivered=True) -> TestClient:
        self.openai = StubClient(error=error)
        self.store = StubStore(store_result)
        self.notifier = StubNotifier(delivered=delivered)
        app = create_app(
            config or AppConfig(),
            content_store=self.store,
            generator=TextGenerator(self.openai, "fake-model"),
            notifier=self.notifier,
        )
        return TestClient(app)


class ChatEndpointTests(ApiTestCase):
    def test_chat_returns_reply_and_metadata(self) -> None:
        client = self.make_client()
        response = client.post("/chat", json={"message": "Hello", "conversationHistory": []})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["reply"], "Stub reply")
        self.assertEqual(body["metadata"]["conversationStage"], "greeting")
        self.assertEqual(body["metadata"]["language"], "en")
        for key in ("intent", "projectsFound", "detailsCollected", "userAgreed"):
            self.assertIn(key, body["metadata"])

    def test_history_is_accepted_and_used(self) -> None:
        client = self.make_client()
        history = [
            {"role": "user", "content": "I need an online store with payments"},
            {"role": "assistant", "content": "Shall I get your contact details so we can send a proposal?"},
        ]
        response = client.post("/chat", json={"message": "yes let's do it", "conversationHistory": history})
        self.assertEqual(response.json()["metadata"]["conversationStage"], "ready_for_contact")

    def test_empty_message(self) -> None:
        client = self.make_client()
        response = client.post("/chat", json={"message": "", "conversationHistory": []})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"reply": "Please provide a message.", "metadata": None})
        self.assertEqual(self.openai.calls, [])

    def test_message_too_long(self) -> None:
        client = self.make_client(config=AppConfig(max_message_length=10))
        response = client.post("/chat", json={"message": "x" * 11})
        self.assertEqual(response.status_code, 400)

    def test_unknown_role_is_rejected(self) -> None:
        client = self.make_client()
        response = client.post(
            "/chat", json={"message": "hi", "conversationHistory": [{"role": "system", "content": "x"}]}
        )
        self.assertEqual(response.status_code, 422)

    def test_generation_failure_returns_localized_apology(self) -> None:
        client = self.make_client(error=OpenAIError("secret upstream detail"))
        response = client.post("/chat", json={"message": "Bonjour, je voudrais un site", "conversationHistory": []})

        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertEqual(body["reply"], "Désolé, une erreur s'est produite. Veuillez réessayer.")
        self.assertNotIn("secret upstream detail", response.text)

    def test_chat_rate_limit(self) -> None:
        client = self.make_client(config=AppConfig(chat_rate_limit="2/minute"))
        for _ in range(2):
            self.assertEqual(client.post("/chat", json={"message": "Hello"}).status_code, 200)

        response = client.post("/chat", json={"message": "Hello"})
        self.assertEqual(response.status_code, 429)
        self.assertIn("Retry-After", response.headers)
        self.assertEqual(response.json()["error"], "rate_limit_exceeded")


class ContactEndpointTests(ApiTestCase):
    payload = {
        "name": "Amina",
        "email": "amina@example.com",
        "phone": "+213555000000",
        "conversationSummary": [
            {"role": "user", "content": "I need an online store"},
            {"role": "assistant", "content": "Great!"},
        ],
        "selectedService": "E-commerce",
    }

    def test_contact_is_summarized_and_forwarded(self) -> None:
        client = self.make_client()
        response = client.post("/contact", json=self.payload)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"success": True, "message": "Contact information received successfully", "notificationSent": True},
        )
        self.assertEqual(len(self.notifier.messages), 1)
        self.assertIn("👤 Name: Amina", self.notifier.messages[0])
        self.assertIn("Stub reply", self.notifier.messages[0])

    def test_notification_failure_still_succeeds(self) -> None:
        client = self.make_client(delivered=False)
        response = client.post("/contact", json=self.payload)

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["success"])
        self.assertFalse(response.json()["notificationSent"])

    def test_summary_generation_failure_uses_fallback(self) -> None:
        client = self.make_client(error=OpenAIError("down"))
        response = client.post("/contact", json=self.payload)

        self.assertEqual(response.status_code, 200)
        self.assertIn("- I need an online store", self.notifier.messages[0])

    def test_free_text_summary(self) -> None:
        client = self.make_client()
        payload = dict(self.payload, conversationSummary="Wants a shop with delivery tracking")
        response = client.post("/contact", json=payload)
        self.assertEqual(response.status_code, 200)
        self.assertIn("Wants a shop with delivery tracking", self.openai.calls[0]["messages"][1]["content"])

    def test_forwarded_header_does_not_reset_the_limit(self) -> None:
        client = self.make_client(config=AppConfig(contact_rate_limit="2/hour"))
        codes = [
            client.post("/contact", json=self.payload, headers={"X-Forwarded-For": f"10.0.0.{index}"}).status_code
            for index in range(4)
        ]
        self.assertEqual(codes, [200, 200, 429, 429])
        self.assertEqual(len(self.notifier.messages), 2)

    def test_missing_fields(self) -> None:
        client = self.make_client()
        response = client.post("/contact", json={"name": "Amina", "email": " "})

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertIn("email", body["message"])
        self.assertIn("phone", body["message"])
        self.assertEqual(self.notifier.messages, [])


class InfoEndpointTests(ApiTestCase):
    def test_health(self) -> None:
        client = self.make_client()
        body = client.get("/health").json()
        self.assertEqual(body["status"], "ok")
        self.assertTrue(body["sanityConnected"])
        self.assertTrue(body["telegramConfigured"])
        self.assertIn("T", body["timestamp"])

    def test_services_from_content_store(self) -> None:
        pricing = {"cards": [{"title": {"en": "E-commerce"}, "subtitle": {"en": "Online stores"}}]}
        client = self.make_client(store_result=pricing)
        body = client.get("/services").json()

        self.assertEqual(body["source"], "content_store")
        self.assertEqual(body["services"], [{"name": "E-commerce", "description": "Online stores", "emoji": "🛒"}])

    def test_services_fall_back_to_defaults(self) -> None:
        client = self.make_client(store_result=None)
        body = client.get("/services").json()

        self.assertEqual(body["source"], "default")
        self.assertEqual(len(body["services"]), 6)


class ServerFactoryTests(unittest.TestCase):
    def test_import_builds_no_application(self) -> None:
        self.assertFalse(hasattr(backend_app, "app"))

    def test_server_factory_runs_start_up_check(self) -> None:
        with mock.patch.object(backend_app, "create_app") as factory:
            backend_app.build_server_app()
        factory.assert_called_once_with(run_diagnostics=True)


if __name__ == "__main__":
    unittest.main()
