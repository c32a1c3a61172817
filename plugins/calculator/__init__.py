"""Calculator plugin manifest."""

manifest = {
    "title": "Calculator",
    "summary": "Evaluate arithmetic expressions with functions, byte units and session variables.",
    "category": "General Utilities",
    "blueprint": "calculator",
}

__all__ = ["manifest"]
