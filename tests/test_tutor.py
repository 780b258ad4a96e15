import unittest

import httpx

from orgreact.config import Settings
from orgreact.errors import TutorError
from orgreact.retry import linear_backoff, retry
from orgreact.tutor import (
    AITutor,
    GeminiGenerator,
    build_explanation_prompt,
    build_tutor_prompt,
    sanitize_text,
)


class FlakyGenerator:
    """Fails a fixed number of times, then answers."""

    def __init__(self, failures, answer="answer"):
        self.failures = failures
        self.answer = answer
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        if len(self.prompts) <= self.failures:
            raise ConnectionError(f"outage {len(self.prompts)}")
        return self.answer


class TestRetry(unittest.TestCase):
    def test_linear_backoff(self):
        delay = linear_backoff(1.0)
        self.assertEqual([delay(n) for n in (1, 2, 3)], [1.0, 2.0, 3.0])

    def test_succeeds_after_failures(self):
        waits = []
        calls = []

        @retry(max_retries=3, delay=linear_backoff(0.5), sleep=waits.append)
        def operation():
            calls.append(1)
            if len(calls) < 3:
                raise ValueError("boom")
            return "ok"

        self.assertEqual(operation(), "ok")
        self.assertEqual(len(calls), 3)
        self.assertEqual(waits, [0.5, 1.0])

    def test_gives_up_and_reraises_last_error(self):
        waits = []
        calls = []

        @retry(max_retries=3, sleep=waits.append)
        def operation():
            calls.append(1)
            raise ValueError(f"boom {len(calls)}")

        with self.assertRaises(ValueError) as ctx:
            operation()
        self.assertEqual(len(calls), 4)
        self.assertEqual(waits, [1.0, 2.0, 3.0])
        self.assertEqual(str(ctx.exception), "boom 4")

    def test_other_exceptions_not_retried(self):
        calls = []

        @retry(max_retries=3, exceptions=(ValueError,), sleep=lambda _: None)
        def operation():
            calls.append(1)
            raise KeyError("nope")

        with self.assertRaises(KeyError):
            operation()
        self.assertEqual(len(calls), 1)

    def test_negative_retries_rejected(self):
        with self.assertRaises(ValueError):
            retry(max_retries=-1)


class TestPrompts(unittest.TestCase):
    def test_sanitize_strips_accents_and_non_ascii(self):
        self.assertEqual(sanitize_text("  Café   crème\n\tbrûlée ⚗️ "), "Cafe creme brulee")

    def test_sanitize_keeps_plain_text(self):
        self.assertEqual(sanitize_text("C2H4 + H2 -> C2H6"), "C2H4 + H2 -> C2H6")

    def test_tutor_prompt_embeds_question(self):
        prompt = build_tutor_prompt("What is  Markovnikov's rule?")
        self.assertIn("You are ChemAI", prompt)
        self.assertIn("Student's message: What is Markovnikov's rule?", prompt)
        self.assertNotIn("\n", prompt)

    def test_explanation_prompt(self):
        prompt = build_explanation_prompt("Ozonolysis of alkenes")
        self.assertTrue(prompt.startswith("As an organic chemistry expert"))
        self.assertIn("Ozonolysis of alkenes", prompt)
        self.assertIn("5. Real-world applications", prompt)


class TestAITutor(unittest.TestCase):
    def test_answer_passes_through(self):
        generator = FlakyGenerator(failures=0, answer="**Hello**")
        tutor = AITutor(generator, sleep=lambda _: None)
        self.assertEqual(tutor.tutor_response("hi"), "**Hello**")
        self.assertEqual(generator.prompts, [build_tutor_prompt("hi")])

    def test_transient_failures_are_retried(self):
        waits = []
        generator = FlakyGenerator(failures=2)
        tutor = AITutor(generator, sleep=waits.append)
        self.assertEqual(tutor.reaction_explanation("nitration"), "answer")
        self.assertEqual(len(generator.prompts), 3)
        self.assertEqual(waits, [1.0, 2.0])

    def test_failure_after_retries(self):
        waits = []
        generator = FlakyGenerator(failures=10)
        tutor = AITutor(generator, max_retries=3, retry_delay=0.1, sleep=waits.append)
        with self.assertRaises(TutorError) as ctx:
            tutor.tutor_response("hi")
        self.assertEqual(len(generator.prompts), 4)
        self.assertEqual(len(waits), 3)
        self.assertEqual(str(ctx.exception), "Failed to get AI tutor response")
        self.assertIsInstance(ctx.exception.__cause__, ConnectionError)
        self.assertEqual(str(ctx.exception.__cause__), "outage 4")

    def test_explanation_failure_message(self):
        tutor = AITutor(FlakyGenerator(failures=10), max_retries=0, sleep=lambda _: None)
        with self.assertRaises(TutorError) as ctx:
            tutor.reaction_explanation("x")
        self.assertEqual(str(ctx.exception), "Failed to get reaction explanation")

    def test_from_settings_without_key(self):
        self.assertIsNone(AITutor.from_settings(Settings(gemini_api_key=None)))

    def test_from_settings_with_key(self):
        tutor = AITutor.from_settings(Settings(gemini_api_key="secret", gemini_model="gemini-test"))
        self.assertIsInstance(tutor.generator, GeminiGenerator)
        self.assertEqual(tutor.generator.model, "gemini-test")
        tutor.generator.close()

    def test_close_closes_generator(self):
        closed = []
        generator = FlakyGenerator(failures=0)
        generator.close = lambda: closed.append(True)
        AITutor(generator).close()
        self.assertEqual(closed, [True])

    def test_close_without_generator_close(self):
        AITutor(FlakyGenerator(failures=0)).close()


class TestGeminiGenerator(unittest.TestCase):
    def _client(self, handler):
        return httpx.Client(base_url="https://gemini.test/v1beta", transport=httpx.MockTransport(handler))

    def test_generate(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["key"] = request.headers.get("x-goog-api-key")
            seen["body"] = request.content
            return httpx.Response(
                200,
                json={"candidates": [{"content": {"parts": [{"text": "Hi "}, {"text": "there"}]}}]},
            )

        generator = GeminiGenerator("k3y", model="gemini-pro", client=self._client(handler))
        self.assertEqual(generator.generate("hello"), "Hi there")
        self.assertIn("/v1beta/models/gemini-pro:generateContent", seen["url"])
        self.assertEqual(seen["key"], "k3y")
        self.assertNotIn("k3y", seen["url"])
        self.assertIn(b"hello", seen["body"])

    def test_http_error_raises(self):
        generator = GeminiGenerator(
            "k3y", client=self._client(lambda request: httpx.Response(500, json={}))
        )
        with self.assertRaises(httpx.HTTPStatusError):
            generator.generate("hello")

    def test_no_candidates(self):
        generator = GeminiGenerator(
            "k3y", client=self._client(lambda request: httpx.Response(200, json={"candidates": []}))
        )
        with self.assertRaises(ValueError):
            generator.generate("hello")

    def test_api_key_not_leaked_by_tutor_error(self):
        generator = GeminiGenerator(
            "SUPERSECRET", client=self._client(lambda request: httpx.Response(500, json={}))
        )
        tutor = AITutor(generator, max_retries=0, sleep=lambda _: None)
        with self.assertLogs("orgreact.tutor", level="ERROR") as logs:
            with self.assertRaises(TutorError) as ctx:
                tutor.tutor_response("hi")
        self.assertNotIn("SUPERSECRET", str(ctx.exception))
        self.assertNotIn("SUPERSECRET", str(ctx.exception.__cause__))
        self.assertNotIn("SUPERSECRET", "\n".join(logs.output))
        self.assertIsInstance(ctx.exception.__cause__, httpx.HTTPStatusError)


if __name__ == '__main__':
    unittest.main()
