"""Developmental milestone reference data for preterm infants.

Expected windows are in corrected-age months:
(earliest, typical, latest). Past the latest month an unlogged milestone
counts as delayed. Based on clinical guidance for preterm development;
preterm_specific marks milestones that commonly arrive later in preterm
babies even after correction.
"""

from typing import Any

# ── { id: (title, category, (earliest, typical, latest), description, clinical_notes, preterm_specific) } ──
MILESTONE_TABLE: dict[str, tuple[str, str, tuple[int, int, int], str, str, bool]] = {
    # 0-3 months corrected age
    "social-smile": (
        "Social Smile", "social", (1, 2, 3),
        "Baby smiles in response to your voice or face, not just gas",
        "One of the first meaningful social interactions", False,
    ),
    "head-control-prone": (
        "Head Control (Prone)", "motor", (2, 3, 4),
        "Lifts head briefly when lying on tummy",
        "Important for neck strength development", False,
    ),
    "visual-tracking": (
        "Visual Tracking", "cognitive", (2, 3, 4),
        "Follows objects with eyes from side to side",
        "Shows developing visual processing", False,
    ),
    # 3-6 months
    "head-control-sitting": (
        "Steady Head Control", "motor", (3, 4, 5),
        "Holds head steady when supported in sitting position",
        "Prerequisite for sitting independently", False,
    ),
    "laughing": (
        "Laughing", "social", (3, 4, 6),
        "Laughs out loud in response to play",
        "Shows emotional development and social engagement", False,
    ),
    "reaching-grasping": (
        "Reaching and Grasping", "motor", (4, 5, 6),
        "Reaches for and grasps toys with intention",
        "Shows hand-eye coordination development", False,
    ),
    # 6-9 months
    "rolling-over": (
        "Rolling Over", "motor", (4, 6, 8),
        "Rolls from tummy to back and back to tummy",
        "Important mobility milestone", True,
    ),
    "sitting-support": (
        "Sitting with Support", "motor", (5, 6, 9),
        "Sits with minimal support, may use hands for balance",
        "Precursor to independent sitting", False,
    ),
    "babbling": (
        "Babbling", "language", (5, 6, 8),
        "Makes repetitive consonant-vowel sounds (ba-ba, da-da)",
        "Foundation for speech development", False,
    ),
    # 9-12 months
    "sitting-independent": (
        "Independent Sitting", "motor", (6, 8, 10),
        "Sits without support for extended periods",
        "Major postural milestone", False,
    ),
    "crawling": (
        "Crawling", "motor", (7, 9, 12),
        "Moves forward on hands and knees",
        "Some babies skip crawling and go straight to walking", True,
    ),
    "object-permanence": (
        "Object Permanence", "cognitive", (7, 9, 11),
        "Looks for toys when they disappear (peek-a-boo)",
        "Shows understanding that objects exist when not visible", False,
    ),
    # 12-18 months
    "pulling-to-stand": (
        "Pulling to Stand", "motor", (9, 10, 13),
        "Pulls self up to standing position using furniture",
        "Precursor to walking", False,
    ),
    "first-words": (
        "First Words", "language", (10, 12, 16),
        'Says first meaningful words besides "mama" and "dada"',
        "May be delayed in preterm babies", True,
    ),
    "walking": (
        "Independent Walking", "motor", (9, 12, 18),
        "Walks independently without support",
        "Often delayed in preterm babies - use corrected age", True,
    ),
}

CATEGORY_LABELS = {
    "motor": "Motor Skills",
    "cognitive": "Cognitive Development",
    "social": "Social & Emotional",
    "language": "Language & Communication",
}


def iter_milestone_rows() -> list[dict[str, Any]]:
    """Return the table as plain dicts in catalog order."""
    rows = []
    for milestone_id, (title, category, window, description, notes, preterm) in MILESTONE_TABLE.items():
        earliest, typical, latest = window
        rows.append({
            "id": milestone_id,
            "title": title,
            "category": category,
            "window": {
                "earliest_months": earliest,
                "typical_months": typical,
                "latest_months": latest,
            },
            "description": description,
            "clinical_notes": notes,
            "preterm_specific": preterm,
        })
    return rows
