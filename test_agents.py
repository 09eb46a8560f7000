"""
Tests for the workflow step agents with a fake provider.
"""

import base64
import json

import pytest

from conftest import FakeProvider, RecordingSleep, SAMPLE_PRODUCT
from product_studio.agents import (
    analyze_feedback,
    generate_commercial_description,
    generate_product_idea,
    generate_product_images,
    generate_product_video,
    save_artifact,
    simulated_feedback,
)
from product_studio.agents.utils import decode_image, parse_bullets, strip_code_fences
from product_studio.agents.video import build_video_request
from product_studio.render.jobs import Artifact, GenerationError, SubmissionError
from product_studio.render.orchestrator import JobOrchestrator


@pytest.mark.asyncio
async def test_product_idea_is_parsed():
    provider = FakeProvider()

    product = await generate_product_idea("bebida de maíz morado", provider)

    assert product.name == SAMPLE_PRODUCT["name"]
    assert product.key_ingredients == SAMPLE_PRODUCT["key_ingredients"]
    assert "'bebida de maíz morado'" in provider.prompts[0]


@pytest.mark.asyncio
async def test_product_idea_accepts_fenced_json():
    provider = FakeProvider()

    async def fenced(prompt, response_schema=None, model=None):
        return f"```json\n{json.dumps(SAMPLE_PRODUCT)}\n```"

    provider.generate_text = fenced

    product = await generate_product_idea("idea", provider)

    assert product.target_audience == SAMPLE_PRODUCT["target_audience"]


@pytest.mark.asyncio
async def test_malformed_product_json_raises_generation_error():
    provider = FakeProvider(product={"name": "Solo nombre"})

    with pytest.raises(GenerationError, match="No se pudo generar la idea del producto"):
        await generate_product_idea("idea", provider)


@pytest.mark.asyncio
async def test_blank_idea_is_rejected():
    with pytest.raises(ValueError):
        await generate_product_idea("   ", FakeProvider())


@pytest.mark.asyncio
async def test_commercial_description_mentions_product(sample_product):
    provider = FakeProvider(description="  ¡Puro sabor peruano!  \n")

    description = await generate_commercial_description(sample_product, provider)

    assert description == "¡Puro sabor peruano!"
    assert sample_product.name in provider.prompts[0]


@pytest.mark.asyncio
async def test_images_are_base64_encoded(sample_product):
    provider = FakeProvider(images=[b"first", b"second"])

    images = await generate_product_images(sample_product, "copy", provider)

    assert [base64.b64decode(i) for i in images] == [b"first", b"second"]
    request = provider.submitted[0]
    assert request.number_of_outputs == 2
    assert request.aspect_ratio == "16:9"
    assert request.output_mime_type == "image/jpeg"


@pytest.mark.asyncio
async def test_image_failure_has_readable_message(sample_product):
    provider = FakeProvider()

    async def failing(request):
        raise GenerationError("quota exceeded")

    provider.generate_images = failing

    with pytest.raises(GenerationError, match="No se pudieron generar las imágenes"):
        await generate_product_images(sample_product, "copy", provider)


def test_video_request_decodes_data_url(sample_product):
    encoded = base64.b64encode(b"jpeg-bytes").decode()

    request = build_video_request(sample_product, "copy", f"data:image/jpeg;base64,{encoded}")

    assert request.reference_image == b"jpeg-bytes"
    assert sample_product.name in request.prompt


def test_invalid_reference_image_is_rejected():
    with pytest.raises(ValueError):
        decode_image("not base64!!")


@pytest.mark.asyncio
async def test_video_uses_orchestrator(sample_product, tmp_path):
    provider = FakeProvider(statuses=["pending", "done"], video=b"mp4")
    sleep = RecordingSleep()
    orchestrator = JobOrchestrator(provider, sleep=sleep)
    seen = []
    reference = base64.b64encode(b"jpeg").decode()

    artifact = await generate_product_video(
        sample_product,
        "copy",
        reference,
        on_progress=seen.append,
        orchestrator=orchestrator,
    )
    path = save_artifact(artifact, "job-1", tmp_path)

    assert artifact.data == b"mp4"
    assert len(seen) == 1
    assert provider.submitted[0].reference_image == b"jpeg"
    assert path.read_bytes() == b"mp4"
    assert path.name == "job-1.mp4"


@pytest.mark.asyncio
async def test_video_errors_propagate(sample_product):
    provider = FakeProvider(submit_error=SubmissionError("rejected"))
    reference = base64.b64encode(b"jpeg").decode()

    with pytest.raises(SubmissionError):
        await generate_product_video(sample_product, "copy", reference, provider=provider)


def test_simulated_feedback_has_five_words_each():
    positive, negative = simulated_feedback()

    assert len(positive) == 5
    assert len(negative) == 5
    assert all(w.score > 0 for w in positive)
    assert all(w.score < 0 for w in negative)
    assert positive[0].word == "delicioso"


@pytest.mark.asyncio
async def test_analyze_feedback_builds_report():
    provider = FakeProvider()

    report = await analyze_feedback(provider)

    assert report.action_plan_items == ["Lanzar campaña en TikTok", "Rediseñar el empaque"]
    assert report.competitor_analysis_items == ["Frugos del Valle: línea sin azúcar"]
    assert len(report.implementation_timeline_items) == 2
    assert "'muy caro' (frecuencia: 45)" in provider.prompts[0]


def test_parse_bullets():
    text = "* Primero\n\n-  Segundo\nTercero sin viñeta\n   \n"

    assert parse_bullets(text) == ["Primero", "Segundo", "Tercero sin viñeta"]
    assert parse_bullets("") == []
    assert parse_bullets(None) == []


def test_strip_code_fences():
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences(' {"a": 1} ') == '{"a": 1}'


def test_artifact_is_immutable():
    artifact = Artifact(data=b"x")

    with pytest.raises(Exception):
        artifact.data = b"y"
