"""Message catalog for alert texts.

Lookups walk ``requested language -> DEFAULT_LANGUAGE -> key``, so a missing
translation shows English and a missing English entry shows the key itself.
"""
from __future__ import annotations

import logging
from typing import Dict, List

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"

CATALOG: Dict[str, Dict[str, str]] = {
    "en": {
        "alerts.feeding_gap.title": "Long Gap Between Feedings",
        "alerts.feeding_gap.message": "It's been {hours} hours since the last feeding. Consider feeding soon.",
        "alerts.feeding_gap.action": "Log a feeding or consult your pediatrician if baby seems lethargic.",
        "alerts.feeding_frequency.title": "Low Feeding Frequency",
        "alerts.feeding_frequency.message": (
            "Average of {average} feedings per day (recommended: 8-12 for newborns)."
        ),
        "alerts.feeding_frequency.action": (
            "Consider more frequent feedings. Consult your pediatrician if baby is not gaining weight."
        ),
        "alerts.sleep_volume.title": "Low Sleep Duration",
        "alerts.sleep_volume.message": (
            "Baby is averaging {average} hours of sleep per day (recommended: 14-17 hours for infants)."
        ),
        "alerts.sleep_volume.action": "Establish a consistent bedtime routine. Ensure a quiet, dark sleep environment.",
        "alerts.wakefulness.title": "Awake for Extended Period",
        "alerts.wakefulness.message": "Baby has been awake for {hours} hours.",
        "alerts.wakefulness.action": (
            "Watch for tired cues like yawning or fussiness. Consider putting baby down for a nap."
        ),
        "alerts.weight_loss.title": "Weight Loss Detected",
        "alerts.weight_loss.message": "Baby has lost {kg} kg since last measurement.",
        "alerts.weight_loss.action": "Schedule a checkup with your pediatrician immediately to discuss weight loss.",
        "alerts.slow_weight_gain.title": "Slow Weight Gain",
        "alerts.slow_weight_gain.message": "Weight gain is slower than expected ({grams}g per week).",
        "alerts.slow_weight_gain.action": "Ensure adequate feeding. Consult your pediatrician if this continues.",
    },
    "es": {
        "alerts.feeding_gap.title": "Intervalo largo entre tomas",
        "alerts.feeding_gap.message": "Han pasado {hours} horas desde la última toma. Considere alimentar pronto.",
        "alerts.feeding_frequency.title": "Baja frecuencia de tomas",
        "alerts.feeding_frequency.message": "Promedio de {average} tomas por día (recomendado: 8-12 para recién nacidos).",
        "alerts.sleep_volume.title": "Poco tiempo de sueño",
        "alerts.sleep_volume.message": "El bebé duerme un promedio de {average} horas por día (recomendado: 14-17 horas).",
        "alerts.wakefulness.title": "Despierto por mucho tiempo",
        "alerts.wakefulness.message": "El bebé lleva {hours} horas despierto.",
        "alerts.weight_loss.title": "Pérdida de peso detectada",
        "alerts.weight_loss.message": "El bebé ha perdido {kg} kg desde la última medición.",
        "alerts.slow_weight_gain.title": "Aumento de peso lento",
        "alerts.slow_weight_gain.message": "El aumento de peso es menor de lo esperado ({grams} g por semana).",
    },
    "fr": {
        "alerts.feeding_gap.title": "Long intervalle entre les tétées",
        "alerts.feeding_frequency.title": "Fréquence des tétées faible",
        "alerts.sleep_volume.title": "Durée de sommeil faible",
        "alerts.wakefulness.title": "Éveillé depuis longtemps",
        "alerts.weight_loss.title": "Perte de poids détectée",
        "alerts.slow_weight_gain.title": "Prise de poids lente",
    },
}


def fallback_chain(language: str) -> List[str]:
    """Languages tried, in order, for a lookup."""
    lang = (language or "").strip().lower() or DEFAULT_LANGUAGE
    return [lang] if lang == DEFAULT_LANGUAGE else [lang, DEFAULT_LANGUAGE]


# PUBLIC_INTERFACE
def translate(key: str, language: str = DEFAULT_LANGUAGE, **params: object) -> str:
    """Resolve ``key`` for ``language`` and format it with ``params``."""
    for lang in fallback_chain(language):
        template = CATALOG.get(lang, {}).get(key)
        if template is not None:
            return template.format(**params)
    logger.warning("Missing message key=%s language=%s", key, language)
    return key
