"""Emojify Engine - storage read, face detection, compositing, storage write."""
import io
import logging
from collections.abc import Mapping

from google.api_core.exceptions import GoogleAPICallError
from PIL import Image

from apps.emojify.compositor import composite, encode_image
from apps.emojify.models import Emoji, EmojifyError, EmojifyResponse, ErrorCode, ERROR_STATUS
from apps.emojify.storage import ObjectStore
from apps.emojify.vision import FaceClassifier

logger = logging.getLogger(__name__)


class EmojifyEngine:
    """Replaces every face of a stored image with an emoji and publishes the result."""

    def __init__(
        self,
        store: ObjectStore,
        classifier: FaceClassifier,
        emojis: Mapping[Emoji, Image.Image],
        bucket_name: str | None,
        public_url_template: str = "https://storage.googleapis.com/{bucket}/{path}",
        output_prefix: str = "emojified/emojified-",
        max_results: int = 100,
        hat_overlay: bool = False,
    ) -> None:
        self.store = store
        self.classifier = classifier
        self.emojis = emojis
        self.bucket_name = bucket_name
        self.public_url_template = public_url_template
        self.output_prefix = output_prefix
        self.max_results = max_results
        self.hat_overlay = hat_overlay

    def emojify(self, object_name: str | None) -> EmojifyResponse:
        """Run the whole flow; every failure comes back as an error envelope."""
        try:
            return self._emojify(object_name or "")
        except EmojifyError as e:
            return self._error_response(e.status_code, e.code, e.message)
        except GoogleAPICallError as e:
            logger.exception("Google API call failed")
            return self._error_response(ERROR_STATUS[ErrorCode.OTHER], ErrorCode.OTHER, e.message, log=False)
        except Exception as e:
            logger.exception("Emojify failed")
            return self._error_response(ERROR_STATUS[ErrorCode.OTHER], ErrorCode.OTHER, str(e), log=False)

    def _error_response(self, status_code: int, code: ErrorCode, message: str, log: bool = True) -> EmojifyResponse:
        if log:
            logger.error(message)
        return EmojifyResponse.failure(status_code, code, message)

    def _emojify(self, object_name: str) -> EmojifyResponse:
        if not object_name:
            raise EmojifyError(ErrorCode.OBJECT_NAME_MISSING)
        if "/" in object_name:
            raise EmojifyError(ErrorCode.SLASHES_FORBIDDEN)

        bucket = self.bucket_name
        if not bucket or not self.store.bucket_exists(bucket):
            raise EmojifyError(ErrorCode.BUCKET_MISSING)

        blob = self.store.get_blob(bucket, object_name)
        if blob is None:
            raise EmojifyError(ErrorCode.BLOB_MISSING)
        if not blob.content_type:
            raise EmojifyError(ErrorCode.CONTENT_TYPE_MISSING)
        image_type = blob.content_type.split(";", 1)[0].split("/", 1)[-1].strip()

        results = self.classifier.detect_faces(f"gs://{bucket}/{object_name}", max_results=self.max_results)
        if len(results) != 1:
            raise EmojifyError(ErrorCode.RESPONSE_COUNT)
        result = results[0]
        if result.error:
            raise EmojifyError(ErrorCode.OTHER, result.error)
        if not result.faces:
            raise EmojifyError(ErrorCode.NO_FACES)

        data = self.store.download(bucket, object_name)
        with Image.open(io.BytesIO(data)) as source:
            emojified = composite(source, result.faces, self.emojis, hat_overlay=self.hat_overlay)
        encoded = encode_image(emojified, image_type)

        object_path = f"{self.output_prefix}{object_name}"
        self.store.upload(bucket, object_path, encoded, content_type=blob.content_type, public=True)
        url = self.public_url_template.format(bucket=bucket, path=object_path)
        logger.info(f"Emojified {len(result.faces)} face(s) of {object_name} into {object_path}")
        return EmojifyResponse.success(object_path, url)
