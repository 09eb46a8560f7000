"""
LangGraph Pipeline Definition for Product Studio.

Runs the four studio steps end-to-end from a single idea.
"""

import logging
from typing import Any

from langchain_core.runnables import RunnableConfig
from langgraph.graph import StateGraph, END

from .agents.copywriting import generate_commercial_description
from .agents.ideation import generate_product_idea
from .agents.imagery import generate_product_images
from .agents.video import generate_product_video, save_artifact
from .render.gemini_client import get_gemini_client
from .render.jobs import StudioError
from .state import (
    StudioState,
    with_description,
    with_error,
    with_images,
    with_product,
    with_video,
)

logger = logging.getLogger(__name__)

_STATE_FIELDS = (
    "product",
    "commercial_description",
    "images",
    "video_path",
    "current_stage",
    "error",
)


def _updates(state: StudioState) -> dict[str, Any]:
    """Channel updates for a node, taken from a transitioned state."""
    return {field: getattr(state, field) for field in _STATE_FIELDS}


def _configurable(config: RunnableConfig | None) -> dict[str, Any]:
    return (config or {}).get("configurable", {})


def _provider(config: RunnableConfig | None):
    return _configurable(config).get("provider") or get_gemini_client()


async def ideation_node(state: StudioState, config: RunnableConfig) -> dict:
    """Step 1: idea -> product"""
    try:
        product = await generate_product_idea(state.idea, _provider(config))
    except (StudioError, ValueError) as e:
        return _updates(with_error(state, str(e)))
    return _updates(with_product(state, product))


async def copywriting_node(state: StudioState, config: RunnableConfig) -> dict:
    """Step 2: product -> commercial description"""
    try:
        description = await generate_commercial_description(state.product, _provider(config))
    except StudioError as e:
        return _updates(with_error(state, str(e)))
    return _updates(with_description(state, description))


async def imagery_node(state: StudioState, config: RunnableConfig) -> dict:
    """Step 3: product + description -> images"""
    try:
        images = await generate_product_images(
            state.product,
            state.commercial_description,
            _provider(config),
        )
    except StudioError as e:
        return _updates(with_error(state, str(e)))
    return _updates(with_images(state, images))


async def video_node(state: StudioState, config: RunnableConfig) -> dict:
    """Step 4: first image -> video written to the output directory"""
    configurable = _configurable(config)
    job_id = configurable.get("job_id", "pipeline")

    try:
        artifact = await generate_product_video(
            state.product,
            state.commercial_description,
            state.images[0],
            on_progress=configurable.get("on_progress"),
            provider=configurable.get("provider"),
            orchestrator=configurable.get("orchestrator"),
        )
    except StudioError as e:
        return _updates(with_error(state, f"No se pudo generar el video: {e}"))

    path = save_artifact(artifact, job_id, configurable.get("output_dir"))
    return _updates(with_video(state, str(path)))


def should_continue(state: StudioState) -> str:
    """
    Conditional edge function to check for errors.

    If there's an error at any stage, skip to END.
    """
    if state.error:
        return "end"
    return "continue"


def create_studio_pipeline():
    """
    Create the LangGraph state graph for the studio workflow.

    Pipeline stages:
    1. ideation - Idea to product concept
    2. copywriting - Commercial description
    3. imagery - Ad images
    4. video - Ad video from the first image

    Providers and job settings are passed through
    config["configurable"]: provider, orchestrator, job_id, on_progress,
    output_dir.

    Returns:
        Compiled LangGraph graph ready for execution
    """
    workflow = StateGraph(StudioState)

    workflow.add_node("ideation", ideation_node)
    workflow.add_node("copywriting", copywriting_node)
    workflow.add_node("imagery", imagery_node)
    workflow.add_node("video", video_node)

    workflow.set_entry_point("ideation")

    workflow.add_conditional_edges(
        "ideation",
        should_continue,
        {"continue": "copywriting", "end": END},
    )

    workflow.add_conditional_edges(
        "copywriting",
        should_continue,
        {"continue": "imagery", "end": END},
    )

    workflow.add_conditional_edges(
        "imagery",
        should_continue,
        {"continue": "video", "end": END},
    )

    workflow.add_edge("video", END)

    return workflow.compile()


async def run_pipeline(
    idea: str,
    configurable: dict[str, Any] | None = None,
) -> StudioState:
    """Run the full pipeline for one idea and return the final state."""
    pipeline = create_studio_pipeline()
    initial_state = StudioState(idea=idea, current_stage="pending")

    result = await pipeline.ainvoke(
        initial_state,
        config={"configurable": configurable or {}},
    )

    final_state = result if isinstance(result, StudioState) else StudioState(**result)
    logger.info(
        f"Pipeline finished at stage {final_state.current_stage} "
        f"({final_state.completed_steps}/4 steps, error={final_state.error})"
    )
    return final_state
