"""
Shared fakes for Product Studio tests.

FakeProvider stands in for GeminiClient: it serves scripted job statuses,
text responses and image bytes without touching the network.
"""

import json

import pytest

from product_studio.render.jobs import Job, JobStatus, PollError
from product_studio.state import FeedbackRecommendations, Product


SAMPLE_PRODUCT = {
    "name": "Chicha Fresh",
    "description": "Bebida de maíz morado con un toque de maracuyá.",
    "key_ingredients": ["maíz morado", "maracuyá", "canela"],
    "target_audience": "Jóvenes de 18 a 25 años en Lima",
}

SAMPLE_RECOMMENDATIONS = {
    "action_plan": "* Lanzar campaña en TikTok\n\n- Rediseñar el empaque",
    "competitor_analysis": "* Frugos del Valle: línea sin azúcar",
    "implementation_timeline": "* Fase 1: 1-3 meses\n* Fase 2: 4-6 meses",
}


class FakeProvider:
    """Scripted provider implementing text, image and job calls."""

    def __init__(
        self,
        statuses=("done",),
        result_uri="https://generativelanguage.test/files/video:download?alt=media",
        failure_reason=None,
        video=b"\x00\x00\x00\x18ftypmp42",
        images=(b"image-one", b"image-two"),
        description="¡Refréscate con Chicha Fresh este verano!",
        product=SAMPLE_PRODUCT,
        recommendations=SAMPLE_RECOMMENDATIONS,
        poll_errors=0,
        download_errors=(),
        submit_error=None,
    ):
        self.statuses = list(statuses)
        self.result_uri = result_uri
        self.failure_reason = failure_reason
        self.video = video
        self.images = list(images)
        self.description = description
        self.product = product
        self.recommendations = recommendations
        self.poll_errors = poll_errors
        self.download_errors = list(download_errors)
        self.submit_error = submit_error

        self.submitted = []
        self.polls = 0
        self.poll_attempts = 0
        self.downloads = []
        self.prompts = []
        self.closed = False

    def _next_job(self) -> Job:
        status = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
        if status == "done":
            return Job(
                job_id="operations/veo-1",
                status=JobStatus.DONE,
                result_uri=self.result_uri,
                failure_reason=self.failure_reason,
            )
        return Job(job_id="operations/veo-1", status=JobStatus.PENDING)

    async def submit(self, request):
        self.submitted.append(request)
        if self.submit_error:
            raise self.submit_error
        return self._next_job()

    async def poll(self, job):
        self.poll_attempts += 1
        if self.poll_errors:
            self.poll_errors -= 1
            raise PollError("connection reset")
        self.polls += 1
        return self._next_job()

    async def download(self, uri):
        self.downloads.append(uri)
        if self.download_errors:
            raise self.download_errors.pop(0)
        return self.video

    async def generate_text(self, prompt, response_schema=None, model=None):
        self.prompts.append(prompt)
        if response_schema is Product:
            return json.dumps(self.product)
        if response_schema is FeedbackRecommendations:
            return json.dumps(self.recommendations)
        return self.description

    async def generate_images(self, request):
        self.submitted.append(request)
        return list(self.images)

    async def close(self):
        self.closed = True


class RecordingSleep:
    """Replacement for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def sample_product():
    return Product(**SAMPLE_PRODUCT)
