"""Model backend adapter for page and image generation."""

import logging

from redesigner.config import Settings
from redesigner.exceptions import GenerationFailure

logger = logging.getLogger(__name__)


class DesignGenerator:
    """Calls the configured text model and the OpenAI image model."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._openai_client = None
        self._anthropic_client = None

    def _get_openai_client(self):
        """Lazy load OpenAI client."""
        if self._openai_client is None:
            from openai import OpenAI
            self._openai_client = OpenAI(api_key=self.settings.openai_api_key)
        return self._openai_client

    def _get_anthropic_client(self):
        """Lazy load Anthropic client."""
        if self._anthropic_client is None:
            from anthropic import Anthropic
            self._anthropic_client = Anthropic(api_key=self.settings.anthropic_api_key)
        return self._anthropic_client

    def _call_openai(self, prompt: str, system: str | None, model: str) -> str:
        client = self._get_openai_client()

        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        response = client.chat.completions.create(
            model=model,
            messages=messages,
            max_tokens=self.settings.llm_max_tokens,
            temperature=self.settings.llm_temperature,
        )

        if response.usage is not None:
            logger.info(f"OpenAI tokens used: {response.usage.total_tokens}")
        return response.choices[0].message.content or ""

    def _call_anthropic(self, prompt: str, system: str | None, model: str) -> str:
        client = self._get_anthropic_client()

        kwargs = {}
        if system:
            kwargs["system"] = system

        response = client.messages.create(
            model=model,
            max_tokens=self.settings.llm_max_tokens,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.settings.llm_temperature,
            **kwargs,
        )

        return "".join(block.text for block in response.content if block.type == "text")

    def generate(self, prompt: str, system: str | None = None) -> str:
        """Call the configured text model and return its raw output.

        Raises:
            GenerationFailure: on provider errors or an empty completion.
        """
        provider = self.settings.llm_provider
        model = self.settings.llm_model

        logger.info(f"Calling {provider} {model} ({len(prompt)} prompt chars)...")

        try:
            if provider == "openai":
                content = self._call_openai(prompt, system, model)
            elif provider == "anthropic":
                content = self._call_anthropic(prompt, system, model)
            else:
                raise ValueError(f"Unknown LLM provider: {provider}")
        except GenerationFailure:
            raise
        except Exception as e:
            raise GenerationFailure(f"{provider} generation failed: {e}") from e

        if not content or not content.strip():
            raise GenerationFailure(f"{provider} returned an empty completion")

        logger.info(f"Generated {len(content)} characters")
        return content

    def generate_image(self, prompt: str) -> str:
        """Generate one image and return its URL.

        Raises:
            GenerationFailure: on provider errors or when no URL comes back.
        """
        model = self.settings.image_model
        logger.info(f"Calling openai {model} for image ({len(prompt)} prompt chars)...")

        try:
            client = self._get_openai_client()
            image = client.images.generate(
                model=model,
                prompt=prompt,
                size=self.settings.image_size,
                quality=self.settings.image_quality,
                n=1,
            )
        except Exception as e:
            raise GenerationFailure(f"Image generation failed: {e}") from e

        if not image.data or not image.data[0].url:
            raise GenerationFailure("Failed to generate image - no URL returned")

        return image.data[0].url
