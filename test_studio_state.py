"""
Tests for StudioState transitions and rotating progress messages.
"""

import pytest

from product_studio.render.progress import ProgressMessages, VIDEO_PROGRESS_MESSAGES
from product_studio.state import (
    Page,
    Product,
    StudioState,
    navigate,
    with_description,
    with_error,
    with_images,
    with_product,
    with_video,
)


def full_state(product: Product) -> StudioState:
    state = with_product(StudioState(idea="chicha"), product)
    state = with_description(state, "Refrescante")
    state = with_images(state, ["aW1n"])
    return with_video(state, "output/job.mp4")


def test_transitions_do_not_mutate_input(sample_product):
    state = StudioState(idea="chicha")

    new_state = with_product(state, sample_product)

    assert state.product is None
    assert new_state.product == sample_product
    assert new_state.idea == "chicha"


def test_new_product_resets_downstream_steps(sample_product):
    state = full_state(sample_product)
    assert state.completed_steps == 4

    other = sample_product.model_copy(update={"name": "Lúcuma Crunch"})
    reset = with_product(state, other)

    assert reset.product.name == "Lúcuma Crunch"
    assert reset.commercial_description is None
    assert reset.images == []
    assert reset.video_path is None
    assert reset.completed_steps == 1


def test_new_description_resets_images_and_video(sample_product):
    state = with_description(full_state(sample_product), "Nueva copia")

    assert state.commercial_description == "Nueva copia"
    assert state.images == []
    assert state.video_path is None


def test_new_images_reset_video(sample_product):
    state = with_images(full_state(sample_product), ["bmV3"])

    assert state.images == ["bmV3"]
    assert state.video_path is None


def test_steps_require_previous_results(sample_product):
    empty = StudioState()

    with pytest.raises(ValueError):
        with_description(empty, "copy")
    with pytest.raises(ValueError):
        with_images(with_product(empty, sample_product), ["img"])
    with pytest.raises(ValueError):
        with_video(empty, "video.mp4")


def test_navigate_keeps_results(sample_product):
    state = full_state(sample_product)

    moved = navigate(state, Page.FEEDBACK)

    assert moved.current_page == Page.FEEDBACK
    assert moved.video_path == state.video_path
    assert navigate(moved, "settings").current_page == Page.SETTINGS


def test_error_keeps_existing_results(sample_product):
    state = with_error(full_state(sample_product), "boom")

    assert state.error == "boom"
    assert state.completed_steps == 4


def test_progress_messages_cycle_back_to_first():
    messages = ProgressMessages(["uno", "dos", "tres"])

    seen = [next(messages) for _ in range(7)]

    assert seen == ["uno", "dos", "tres", "uno", "dos", "tres", "uno"]


def test_default_progress_messages_are_video_messages():
    messages = ProgressMessages()

    assert next(messages) == VIDEO_PROGRESS_MESSAGES[0]


def test_progress_messages_require_at_least_one():
    with pytest.raises(ValueError):
        ProgressMessages([])
