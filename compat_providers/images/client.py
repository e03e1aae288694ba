"""Image generation client: ``images/generations`` and ``images/variations``."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

from pydantic import ValidationError

from ..base.cancellation import CancellationToken
from ..base.dto import ImageRequest, ImageResults
from ..base.errors import ConfigurationError, MalformedResponseError, ProviderError
from ..base.facade import AiClientBase
from ..base.pipeline import INVALID_RESPONSE_MESSAGE
from ..config.defaults import IMAGE_GENERATIONS_SEGMENT, IMAGE_VARIATIONS_SEGMENT
from .prompt import ImageOutputFormat, ImagePrompt, ImageResult


class ImageGenerationClient(AiClientBase):
    """Generate images and image variations.

    Built from a registry, the client uses the registry's active image
    connection. Results land in ``prompt.images``; methods return ``True`` on
    success and ``False`` with ``error_message`` set on failure.
    """

    uses_image_connection = True

    def build_request(self, prompt: ImagePrompt, output_format: ImageOutputFormat) -> ImageRequest:
        gpt_image = output_format is ImageOutputFormat.NONE
        return ImageRequest(
            prompt=prompt.prompt,
            model=prompt.model or self.connection.model_id or None,
            n=prompt.image_count,
            size=prompt.image_size,
            style=None if gpt_image else prompt.image_style,
            quality=prompt.image_quality,
            background=prompt.image_background,
            response_format=None if gpt_image else output_format.value,
            output_format=prompt.output_file_format if gpt_image else None,
        )

    async def generate(
        self,
        prompt: ImagePrompt,
        output_format: ImageOutputFormat = ImageOutputFormat.URL,
        *,
        timeout_seconds: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> bool:
        """Generate images for ``prompt.prompt`` into ``prompt.images``."""
        self.set_error()
        prompt.images = []
        if not prompt.prompt:
            return self._fail(ConfigurationError(message="No prompt provided for image generation."))

        body = await self.pipeline.send_json_request(
            self.build_request(prompt, output_format),
            IMAGE_GENERATIONS_SEGMENT,
            timeout_seconds=timeout_seconds,
            cancel_token=cancel_token,
        )
        if body is None:
            self._record_pipeline_failure()
            return False
        return self._apply_results(prompt, body)

    async def create_variation(
        self,
        prompt: ImagePrompt,
        output_format: ImageOutputFormat = ImageOutputFormat.URL,
        *,
        timeout_seconds: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> bool:
        """Upload ``prompt``'s variation image and collect the variations."""
        self.set_error()
        prompt.images = []
        try:
            image = self._variation_image(prompt)
        except ConfigurationError as exc:
            return self._fail(exc)
        if image is None:
            return self._fail(ConfigurationError(message="No image provided for image variation."))

        fields = {"size": prompt.image_size}
        if output_format is not ImageOutputFormat.NONE:
            fields["response_format"] = output_format.value
        body = await self.pipeline.send_multipart_request(
            IMAGE_VARIATIONS_SEGMENT,
            files={"image": image},
            data=fields,
            timeout_seconds=timeout_seconds,
            cancel_token=cancel_token,
        )
        if body is None:
            self._record_pipeline_failure()
            return False
        return self._apply_results(prompt, body)

    @staticmethod
    def _variation_image(prompt: ImagePrompt) -> Optional[Tuple[str, bytes, str]]:
        if prompt.variation_image:
            name = Path(prompt.variation_image_path).name if prompt.variation_image_path else "image.png"
            return name, prompt.variation_image, "image/png"
        if prompt.variation_image_path:
            path = Path(prompt.variation_image_path)
            if path.is_file():
                try:
                    data = path.read_bytes()
                except OSError as exc:
                    raise ConfigurationError(
                        message=f"Unable to read variation image: {path}", raw=exc
                    ) from exc
                return path.name, data, "image/png"
        return None

    def _apply_results(self, prompt: ImagePrompt, body: str) -> bool:
        try:
            results = ImageResults.model_validate_json(body)
        except ValidationError as exc:
            return self._fail(self._malformed(exc))
        if not results.data:
            return self._fail(self._malformed(None))
        prompt.images = [
            ImageResult(url=d.url, base64_data=d.b64_json, revised_prompt=d.revised_prompt)
            for d in results.data
        ]
        return True

    def _malformed(self, raw: Optional[BaseException]) -> MalformedResponseError:
        return MalformedResponseError(
            message=INVALID_RESPONSE_MESSAGE,
            provider=self.connection.provider_mode.value,
            model=self.connection.model_id or None,
            raw=raw,
        )

    def _fail(self, error: ProviderError) -> bool:
        self.set_error(error.message, error)
        return False


__all__ = ["ImageGenerationClient"]
