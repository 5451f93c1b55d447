"""
Standalone UI generation: components, page layouts and styling.

Requests go through the same generation service as project code, always as a
Solana frontend, with a prompt tuned for a single React component.
"""

from __future__ import annotations

import re
from enum import Enum


class UIType(str, Enum):
    COMPONENT = "component"
    PAGE = "page"
    STYLING = "styling"


_COMPONENT_NAME_RE = re.compile(r"export\s+(?:default\s+)?(?:function\s+|const\s+)([A-Z][a-zA-Z0-9]*)")

# (prompt prefix, default context) per UI type
_TYPE_FRAMING: dict[UIType, tuple[str, str | None]] = {
    UIType.COMPONENT: ("", None),
    UIType.PAGE: (
        "Create a complete page layout for: ",
        "v0.dev inspired layout with sidebar, main content, and proper navigation",
    ),
    UIType.STYLING: ("Create CSS styles and Tailwind classes for: ", "v0.dev inspired design system"),
}

_REQUIREMENTS = (
    "Use TypeScript",
    "Use Tailwind CSS for styling",
    "Use shadcn/ui components where appropriate",
    "Make it responsive",
    "Add proper TypeScript types",
    "Include proper accessibility",
    "Use modern React patterns (hooks, functional components)",
    "Add smooth animations with Framer Motion",
    "Make it look like v0.dev with clean, modern design",
    "Use proper color schemes for light/dark mode",
    "Add subtle shadows and borders",
    "Make buttons and corners boxy (not rounded)",
    "Use proper spacing and typography",
)


def build_ui_prompt(prompt: str, ui_type: UIType, context: str | None = None) -> str:
    """Wrap a UI request with the design requirements and optional context."""
    prefix, default_context = _TYPE_FRAMING[ui_type]
    context = context or default_context

    lines = [
        "Create a modern React component with the following requirements:",
        "",
        f"{prefix}{prompt}",
        "",
        "Requirements:",
        *(f"- {item}" for item in _REQUIREMENTS),
        "",
    ]
    if context:
        lines += [f"Context: {context}", ""]
    lines.append("Please generate a complete, production-ready component:")
    return "\n".join(lines)


def extract_component_names(code: str) -> list[str]:
    """Names of exported PascalCase functions and consts, in source order."""
    return _COMPONENT_NAME_RE.findall(code)
