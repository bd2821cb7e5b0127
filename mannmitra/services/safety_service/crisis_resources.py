"""Static crisis-resources payload.

Shown when a community post is blocked with a crisis verdict and when the
chat crisis banner fires. No generated content, just fixed resources.
"""
from typing import Any, Dict


def get_crisis_resources() -> Dict[str, Any]:
    """Crisis UI configuration for the frontend.

    Returns a fresh dict on every call so callers may annotate it.
    """
    return {
        "title": "Crisis Support Resources",
        "message": (
            "If you're having thoughts of self-harm, please reach out for "
            "immediate help. You don't have to go through this alone."
        ),
        "resources": [
            {
                "name": "India Suicide Prevention Helpline",
                "phone": "1-800-599-0019",
                "priority": 1,
            },
            {
                "name": "Sneha Foundation",
                "phone": "044-24640050",
                "priority": 2,
            },
            {
                "name": "Emergency",
                "phone": "112",
                "priority": 3,
            },
        ],
        "show_emergency": True,
    }
