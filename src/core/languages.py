"""
Supported programming languages for conversion.

The set is closed: the agent is only asked to convert between these labels.
"""

SUPPORTED_LANGUAGES: tuple[str, ...] = (
    "Python",
    "JavaScript",
    "TypeScript",
    "Java",
    "C++",
    "C#",
    "Go",
    "Rust",
    "PHP",
    "Ruby",
    "Swift",
    "Kotlin",
    "Dart",
    "SQL",
    "HTML/CSS",
)

DEFAULT_SOURCE_LANGUAGE = "JavaScript"
DEFAULT_TARGET_LANGUAGE = "Python"


def is_supported_language(name: object) -> bool:
    """Check whether a value is one of the supported language labels."""
    return isinstance(name, str) and name in SUPPORTED_LANGUAGES
