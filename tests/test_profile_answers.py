import unittest

from app.core.errors import ValidationError
from app.services.profile_answers import FALLBACK_ANSWER, _index, answer_question, extract_technologies
from app.services.profile_service import load_profile


class ProfileAnswerTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.profile = load_profile()

    def ask(self, question: str) -> str:
        return answer_question(question, self.profile)

    def test_blank_question_is_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            self.ask("   ")
        self.assertEqual(ctx.exception.message, "Please provide a question.")

    def test_contact_fields(self):
        self.assertEqual(self.ask("What is his email?"), self.profile.email)
        self.assertEqual(self.ask("first name?"), "Sudharsan")
        self.assertEqual(self.ask("Share the GitHub link"), self.profile.github)

    def test_about_returns_summary(self):
        self.assertEqual(self.ask("Tell me about him"), self.profile.about)

    def test_technology_with_work_experience(self):
        answer = self.ask("Tell me about the HTML experience")
        self.assertTrue(answer.startswith("Sudharsan has work experience with HTML at:"))
        self.assertIn("• Software Engineer - Fortress Information Security (Jun 2021 - Present)", answer)
        self.assertIn("Merch", answer)

    def test_technology_used_in_project(self):
        answer = self.ask("Has he worked with PostgreSQL?")
        self.assertIn("PostgreSQL was also used in the project(s):", answer)
        self.assertIn("• Portfolio Website", answer)

    def test_skill_without_experience(self):
        answer = self.ask("Has he used Express?")
        self.assertIn("listed under the skills", answer)

    def test_related_family_suggestion(self):
        answer = self.ask("Does he know Angular?")
        self.assertIn("I do not see explicit experience with Angular", answer)
        self.assertIn("React", answer)
        self.assertIn("pick it up quickly", answer)

    def test_unknown_technology(self):
        answer = self.ask("Do you have experience with Kubernetes?")
        self.assertEqual(answer, "I do not see explicit work experience or projects related to Kubernetes.")

    def test_tech_stack_lists_skill_groups(self):
        answer = self.ask("What is the tech stack?")
        self.assertIn("Languages: JavaScript, TypeScript", answer)
        self.assertIn("AI Tools:", answer)

    def test_section_questions(self):
        self.assertIn("• Portfolio Website:", self.ask("Show me the projects"))
        self.assertIn("University of Texas, Arlington", self.ask("Where did he go to university?"))

    def test_fallback(self):
        self.assertEqual(self.ask("What's the weather like?"), FALLBACK_ANSWER)

    def test_aliases_are_normalized(self):
        index = _index(self.profile)
        self.assertEqual(extract_technologies("Does he know nodejs and postgres?", index), ["node.js", "postgresql"])


if __name__ == "__main__":
    unittest.main()
