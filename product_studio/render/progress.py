"""
Rotating progress messages shown while a long-running job is polled.

The sequence advances once per poll tick and has no relation to how far
the provider actually is.
"""

from itertools import cycle
from typing import Iterable, Iterator


VIDEO_PROGRESS_MESSAGES = [
    "Iniciando la producción del spot...",
    "Buscando locaciones en Perú y contratando al equipo...",
    "Renderizando la primera escena... Este proceso puede tardar unos minutos.",
    "Añadiendo efectos de postproducción y color...",
    "Masterizando el audio con ritmos latinos...",
    "¡Tu video publicitario está casi listo para el gran estreno!",
]

IMAGE_PROGRESS_MESSAGES = [
    "Preparando las cámaras para la sesión de fotos...",
    "Buscando la mejor luz en la playa...",
    "Renderizando los pixeles más refrescantes...",
    "Añadiendo el toque final de verano...",
    "¡Casi listo! Las imágenes están quedando geniales.",
]


class ProgressMessages:
    """Endless cyclic iterator over a fixed set of status messages."""

    def __init__(self, messages: Iterable[str] = VIDEO_PROGRESS_MESSAGES):
        self.messages = list(messages)
        if not self.messages:
            raise ValueError("At least one progress message is required")
        self._cycle = cycle(self.messages)

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        return next(self._cycle)
