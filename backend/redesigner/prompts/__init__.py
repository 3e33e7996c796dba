"""Model prompts for page redesign and mockup images."""

from redesigner.prompts.mockup_image import MOCKUP_IMAGE_PROMPT
from redesigner.prompts.redesign import REDESIGN_PROMPT, REDESIGN_SYSTEM_PROMPT

__all__ = [
    "REDESIGN_PROMPT",
    "REDESIGN_SYSTEM_PROMPT",
    "MOCKUP_IMAGE_PROMPT",
]
