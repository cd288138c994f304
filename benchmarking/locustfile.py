"""Locust load testing script for BlogSummarizer."""

import random
import uuid

from locust import HttpUser, between, task

# Common tags for random filtering
SAMPLE_TAGS = [
    "AI",
    "Python",
    "Productivity",
    "Startups",
    "Security",
    "Web Development",
]

SAMPLE_SEARCHES = ["data", "guide", "how", "learning"]


class BlogSummarizerUser(HttpUser):
    """Simulated dashboard user for load testing BlogSummarizer.

    Summarize calls are left out on purpose: they hit a paid provider.
    """

    wait_time = between(1, 3)  # Wait 1-3 seconds between tasks

    def on_start(self) -> None:
        self.client.headers["X-User-Id"] = f"load-{uuid.uuid4()}"

    @task(3)
    def list_summaries(self) -> None:
        """Dashboard landing - most common operation."""
        self.client.get("/api/v1/summaries")

    @task(2)
    def fetch_stats(self) -> None:
        """Dashboard analytics cards."""
        self.client.get("/api/v1/summaries/stats")

    @task(1)
    def list_summaries_with_random_tag(self) -> None:
        """Filter by a random tag."""
        tag = random.choice(SAMPLE_TAGS)
        self.client.get("/api/v1/summaries", params={"tag": tag})

    @task(1)
    def search_summaries(self) -> None:
        """Search with a sort order."""
        self.client.get(
            "/api/v1/summaries",
            params={
                "q": random.choice(SAMPLE_SEARCHES),
                "sort": random.choice(["newest", "oldest", "title", "reading_time"]),
            },
        )
