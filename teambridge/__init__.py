"""Teams chat bot building blocks: activity types, access gating, prompts, cards, attachments, streaming and a service URL store."""

__version__ = "0.1.0"

__all__ = [
    "types",
    "access",
    "prompts",
    "attachments",
    "cards",
    "invoke",
    "streaming",
    "serviceurl_store",
]