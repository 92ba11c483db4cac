"""
Shared fixtures: CSV files on disk and a scripted stand-in for the LLM client
"""
import csv
import json

import pytest

from src.tweet_analysis.translator import Translator

TWEET_HEADER = ["id", "conversation_id", "created_at", "date", "time", "username", "tweet", "language"]


def write_tweets_csv(path, rows, header=TWEET_HEADER):
    """Write rows (dicts or lists) to a CSV file with the given header"""
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        if header:
            writer.writerow(header)
        for row in rows:
            if isinstance(row, dict):
                writer.writerow([row.get(col, "") for col in header])
            else:
                writer.writerow(row)
    return str(path)


class FakeClient:
    """Returns queued responses (or raises queued exceptions) in call order"""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def generate(self, prompt, schema=None, temperature=None):
        self.calls.append({"prompt": prompt, "schema": schema, "temperature": temperature})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, dict):
            return json.dumps(response)
        return response


class SuffixTranslator(Translator):
    """Translator that tags text instead of calling a model"""

    def __init__(self, suffix=" (fr)"):
        super().__init__(client=None, max_workers=4)
        self.suffix = suffix

    def translate(self, text, target_language):
        return f"{text}{self.suffix}"


@pytest.fixture
def three_tweets_csv(tmp_path):
    rows = [
        {"id": "A", "tweet": "Great news!"},
        {"id": "B", "tweet": "Terrible outcome."},
        {"id": "C", "tweet": "Meeting held today."},
    ]
    return write_tweets_csv(tmp_path / "tweets.csv", rows)


@pytest.fixture
def fifty_tweets_csv(tmp_path):
    rows = [{"id": f"{i:03d}", "tweet": f"tweet number {i}"} for i in range(50)]
    return write_tweets_csv(tmp_path / "fifty.csv", rows)
