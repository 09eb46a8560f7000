"""
Prompt Builder - assembles provider prompts from domain objects.

All prompts target the Peruvian food market and ask for Spanish output.
"""

from ..state import Product, SentimentWord


def product_idea_prompt(idea: str) -> str:
    return (
        "Actúa como un experto en marketing e innovación de la industria "
        f"alimentaria en Perú. Basado en la siguiente idea: '{idea}', genera un "
        "concepto de producto innovador y detallado para el mercado peruano. "
        "Responde en español."
    )


def commercial_description_prompt(product: Product) -> str:
    return f"""Actúa como un redactor publicitario experto para el mercado peruano. Para el siguiente producto:
- Nombre: '{product.name}'
- Descripción: '{product.description}'
Crea una descripción comercial potente y atractiva dirigida a jóvenes (18-25 años). El tono debe ser fresco, moderno y enérgico, usando jerga peruana sutil y apropiada. La descripción debe ser versátil para un spot de TV de 30 segundos, una descripción de e-commerce y posts para redes sociales. Resalta sus fortalezas y por qué es ideal para el verano. Responde únicamente con el texto de la descripción en español."""


def product_images_prompt(product: Product, description: str) -> str:
    return (
        "Crea una imagen publicitaria fotorrealista para un nuevo producto "
        f"alimenticio peruano llamado '{product.name}'. La descripción es: "
        f"'{description}'. La escena es una vibrante playa peruana durante el "
        "verano. Un grupo de jóvenes atractivos y diversos se ríe y disfruta del "
        "producto. La imagen debe ser de alta calidad, con colores vivos y una "
        "iluminación cálida de atardecer. El producto debe ser el punto focal, "
        "luciendo delicioso y refrescante. Estilo perfecto para un panel "
        "publicitario en un centro comercial y redes sociales como Instagram. La "
        "composición debe ser dinámica y llena de energía positiva. Opcionalmente, "
        "puedes integrar sutilmente textos publicitarios cortos y atractivos en "
        "español, como el nombre del producto o un eslogan corto como 'El sabor "
        "del verano'."
    )


def product_video_prompt(product: Product, description: str) -> str:
    return f"""Actúa como un director de comerciales experto para el mercado peruano. Tu misión es crear un video publicitario de 15 segundos para el producto '{product.name}'.

**Instrucciones Clave:**
1.  **Producto Principal:** El video DEBE centrarse en mostrar el producto. Utiliza la imagen del empaque proporcionada como referencia visual EXACTA para el producto que aparece en el video. El producto debe verse delicioso y ser el héroe de cada toma.
2.  **Contexto:** La escena debe ser vibrante y moderna, mostrando el producto tal como se describe: '{description}'. Evita escenas con muchas personas; el foco es el producto en sí.
3.  **Texto en Pantalla:** La ÚNICA frase que debe aparecer en el video es el nombre del producto: '{product.name}'. Este texto debe estar escrito correctamente en español y aparecer de forma clara y atractiva al final del video. No incluyas ninguna otra palabra o frase.
4.  **Estilo:** El video debe tener un estilo cinematográfico, con colores vivos y una iluminación atractiva que resalte las características del producto. La música de fondo debe ser moderna y enérgica. No incluyas diálogos hablados."""


def _format_words(words: list[SentimentWord]) -> str:
    return ", ".join(f"'{w.word}' (frecuencia: {w.frequency})" for w in words)


def feedback_recommendations_prompt(
    positive_words: list[SentimentWord],
    negative_words: list[SentimentWord],
) -> str:
    return f"""Actúa como un director de producto y estratega de marketing de alto nivel para Alicorp en Perú. Se ha realizado un análisis de sentimiento del feedback de clientes en redes sociales.

**Datos Clave del Feedback:**
- **Principales Fortalezas (Palabras Positivas):** {_format_words(positive_words)}.
- **Principales Debilidades (Palabras Negativas):** {_format_words(negative_words)}.

Basado en estos datos, genera un informe estratégico extremadamente detallado y accionable para los equipos de Marketing y Producto. El objetivo es crear una ventaja competitiva tangible. Responde exclusivamente en español."""
