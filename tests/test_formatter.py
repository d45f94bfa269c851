"""Tests for content formatting and the service catalog."""

import unittest

from content.catalog import default_services, emoji_for, services_from_pricing
from content.formatter import (
    filter_cards_for_service,
    format_content,
    format_pricing,
    format_projects,
    format_team,
)

PROJECT = {
    "title": {"en": "Nova Shop", "fr": "Boutique Nova"},
    "description": {"en": "An online store for a fashion brand"},
    "category": {"en": "E-commerce", "fr": "E-commerce"},
    "featured": True,
    "projectId": "nova-shop",
    "projectDetails": {
        "features": {"en": ["Secure payments", "Order tracking"]},
        "info": [{"label": {"en": "Client"}, "value": {"en": "Nova"}}],
        "tags": ["react", "stripe"],
        "content": {
            "en": [
                {"_type": "block", "children": [{"text": "x" * 600}]},
            ]
        },
    },
}

PRICING = {
    "title": {"en": "Our packages"},
    "cards": [
        {"title": {"en": "Professional Websites"}, "price": "50000", "currency": "DZD", "period": {"en": "per project"}},
        {"title": {"en": "Mobile App Development"}, "subtitle": {"en": "iOS and Android"}, "popular": True},
        {"title": {"en": "E-commerce"}, "features": {"en": ["Payments", "Catalog"]}},
    ],
}


class ProjectFormattingTests(unittest.TestCase):
    def test_detected_language_with_english_fallback(self) -> None:
        french = format_projects([PROJECT], "fr")
        self.assertIn("Title: Boutique Nova", french)
        self.assertIn("Description: An online store for a fashion brand", french)

        arabic = format_projects([PROJECT], "ar")
        self.assertIn("Title: Nova Shop", arabic)

    def test_optional_sections_rendered_when_present(self) -> None:
        text = format_projects([PROJECT], "en")
        self.assertIn("--- Project 1 ---", text)
        self.assertIn("Status: Featured Project ⭐", text)
        self.assertIn("Project ID: nova-shop", text)
        self.assertIn("  ✓ Secure payments", text)
        self.assertIn("  • Client: Nova", text)
        self.assertIn("Tags: react, stripe", text)

    def test_optional_sections_skipped_when_absent(self) -> None:
        text = format_projects([{"title": {"en": "Plain"}}], "en")
        self.assertIn("Category: N/A", text)
        self.assertNotIn("Key Features", text)
        self.assertNotIn("Tags", text)
        self.assertNotIn("Featured", text)

    def test_long_content_is_truncated(self) -> None:
        text = format_projects([PROJECT], "en")
        self.assertIn("x" * 500 + "...", text)
        self.assertNotIn("x" * 501, text)

    def test_empty_results_format_to_none(self) -> None:
        self.assertIsNone(format_projects([], "en"))
        self.assertIsNone(format_content("pricing", None, "en"))
        self.assertIsNone(format_content("team", [], "en"))
        self.assertIsNone(format_content("listAll", None, "en"))


class PricingFormattingTests(unittest.TestCase):
    def test_all_cards_without_service(self) -> None:
        text = format_pricing(PRICING, "en")
        self.assertIn("Pricing: Our packages", text)
        self.assertIn("Price: 50000 DZD per project", text)
        self.assertIn("Most popular ⭐", text)
        self.assertIn("  ✓ Payments", text)
        self.assertNotIn("Other available services", text)

    def test_service_filter_narrows_cards(self) -> None:
        text = format_pricing(PRICING, "en", "Mobile App Development")
        self.assertIn("Service: Mobile App Development", text)
        self.assertNotIn("Service: Professional Websites", text)
        self.assertIn("Other available services: Professional Websites, E-commerce", text)

    def test_substring_match_in_either_direction(self) -> None:
        cards = [{"title": {"en": "Mobile App"}}, {"title": {"en": "Websites"}}]
        matched, others = filter_cards_for_service(cards, "Mobile App Development")
        self.assertEqual(matched, [cards[0]])
        self.assertEqual(others, [cards[1]])

    def test_no_match_falls_back_to_all_cards(self) -> None:
        matched, others = filter_cards_for_service(PRICING["cards"], "UI/UX Design")
        self.assertEqual(len(matched), 3)
        self.assertEqual(others, [])

    def test_section_without_cards_is_no_data(self) -> None:
        self.assertIsNone(format_pricing({"title": {"en": "Empty"}, "cards": []}, "en"))


class TeamFormattingTests(unittest.TestCase):
    def test_team_section(self) -> None:
        section = {
            "title": {"en": "About us", "fr": "À propos"},
            "content": {"en": "We build digital products."},
            "info": [{"label": {"en": "Founded"}, "value": {"en": "2020"}}],
            "members": [{"name": "Yacine", "role": {"en": "Lead developer"}}],
        }
        text = format_team(section, "fr")
        self.assertIn("About: À propos", text)
        self.assertIn("We build digital products.", text)
        self.assertIn("  • Founded: 2020", text)
        self.assertIn("  • Yacine (Lead developer)", text)


class ServiceCatalogTests(unittest.TestCase):
    def test_emoji_first_substring_wins(self) -> None:
        self.assertEqual(emoji_for("E-commerce"), "🛒")
        self.assertEqual(emoji_for("Mobile App Development"), "📱")
        self.assertEqual(emoji_for("Artificial Intelligence & Automation"), "🤖")
        self.assertEqual(emoji_for("UI/UX Design"), "🎨")
        self.assertEqual(emoji_for("Custom Software"), "💻")
        self.assertEqual(emoji_for("Professional Websites"), "🌐")
        self.assertEqual(emoji_for("Consulting"), "✨")

    def test_default_services_cover_catalog(self) -> None:
        names = [service["name"] for service in default_services()]
        self.assertEqual(len(names), 6)
        self.assertEqual(names[0], "E-commerce")

    def test_services_from_pricing(self) -> None:
        services = services_from_pricing(PRICING)
        self.assertEqual([service["name"] for service in services], ["Professional Websites", "Mobile App Development", "E-commerce"])
        self.assertEqual(services[1]["description"], "iOS and Android")
        self.assertEqual(services_from_pricing(None), [])


if __name__ == "__main__":
    unittest.main()
