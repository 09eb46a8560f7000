"""
Pydantic state models for Product Studio.

Uses Pydantic BaseModel for validation + easier API serialization.

STUDIO FLOW (each step feeds the next):
- Ideation: free-text idea -> Product
- Copywriting: Product -> commercial description
- Imagery: Product + description -> ad images
- Video: Product + description + first image -> ad video

Changing an earlier step discards everything downstream of it.
"""

from enum import Enum
from pydantic import BaseModel, Field


class Page(str, Enum):
    """Top-level pages of the studio"""

    STUDIO = "studio"
    SETTINGS = "settings"
    FEEDBACK = "feedback"


# ============================================================================
# Domain models
# ============================================================================


class Product(BaseModel):
    """A generated product concept"""

    name: str = Field(description="Nombre comercial del producto.")
    description: str = Field(
        description="Descripción detallada del producto, su sabor, textura y propuesta de valor."
    )
    key_ingredients: list[str] = Field(
        description="Lista de 3-5 ingredientes clave, preferiblemente peruanos."
    )
    target_audience: str = Field(description="Descripción del público objetivo principal.")


class SentimentWord(BaseModel):
    """A keyword from customer feedback"""

    word: str
    frequency: int = Field(ge=0)
    score: float = Field(ge=-1.0, le=1.0)  # -1 very negative, 1 very positive


class FeedbackRecommendations(BaseModel):
    """Strategic report generated from sentiment data"""

    action_plan: str = Field(
        description=(
            "Un plan de acción detallado y accionable. Formatea la respuesta "
            "OBLIGATORIAMENTE como una lista de viñetas (cada punto iniciando con "
            "'*' o '-'). Cada punto debe ser un paso claro y concreto."
        )
    )
    competitor_analysis: str = Field(
        description=(
            "Un análisis específico de 1-2 productos competidores clave en Perú. "
            "Formatea la respuesta OBLIGATORIAMENTE como una lista de viñetas "
            "(cada punto iniciando con '*' o '-'). Menciona el producto, la "
            "empresa y su estrategia."
        )
    )
    implementation_timeline: str = Field(
        description=(
            "Una estimación del tiempo de implementación desglosada por fases. "
            "Formatea la respuesta OBLIGATORIAMENTE como una lista de viñetas "
            "(cada punto iniciando con '*' o '-')."
        )
    )


class FeedbackReport(BaseModel):
    """Everything the feedback dashboard renders"""

    positive_words: list[SentimentWord]
    negative_words: list[SentimentWord]
    recommendations: FeedbackRecommendations
    action_plan_items: list[str] = []
    competitor_analysis_items: list[str] = []
    implementation_timeline_items: list[str] = []


# ============================================================================
# Application State
# ============================================================================


class StudioState(BaseModel):
    """
    Root application state.

    Owned by a single controller (the API or the pipeline graph). Use the
    transition functions below instead of assigning fields directly.
    """

    current_page: Page = Page.STUDIO

    # Workflow inputs/outputs, in step order
    idea: str = ""
    product: Product | None = None
    commercial_description: str | None = None
    images: list[str] = []  # base64-encoded JPEG
    video_path: str | None = None

    # Progress tracking
    current_stage: str | None = None

    # Error handling
    error: str | None = None
    warnings: list[str] = []

    @property
    def completed_steps(self) -> int:
        steps = [
            self.product is not None,
            self.commercial_description is not None,
            bool(self.images),
            self.video_path is not None,
        ]
        return sum(steps)


def navigate(state: StudioState, page: Page) -> StudioState:
    """Switch pages without touching workflow results."""
    return state.model_copy(update={"current_page": Page(page)})


def with_product(state: StudioState, product: Product) -> StudioState:
    """Store a new product; copy, images and video no longer apply."""
    return state.model_copy(
        update={
            "product": product,
            "commercial_description": None,
            "images": [],
            "video_path": None,
            "error": None,
            "current_stage": "ideation",
        }
    )


def with_description(state: StudioState, description: str) -> StudioState:
    """Store marketing copy; images and video no longer apply."""
    if state.product is None:
        raise ValueError("A product is required before writing a description")
    return state.model_copy(
        update={
            "commercial_description": description,
            "images": [],
            "video_path": None,
            "error": None,
            "current_stage": "copywriting",
        }
    )


def with_images(state: StudioState, images: list[str]) -> StudioState:
    """Store generated images; the video no longer applies."""
    if state.commercial_description is None:
        raise ValueError("A commercial description is required before generating images")
    return state.model_copy(
        update={
            "images": list(images),
            "video_path": None,
            "error": None,
            "current_stage": "imagery",
        }
    )


def with_video(state: StudioState, video_path: str) -> StudioState:
    """Store the final video location."""
    if not state.images:
        raise ValueError("At least one image is required before generating a video")
    return state.model_copy(
        update={"video_path": video_path, "error": None, "current_stage": "video"}
    )


def with_error(state: StudioState, error: str) -> StudioState:
    """Record a failure, keeping results already produced."""
    return state.model_copy(update={"error": error})
