"""Emojify data models."""
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class Emoji(str, Enum):
    JOY = "joy"
    ANGER = "anger"
    SURPRISE = "surprise"
    SORROW = "sorrow"
    HAT = "hat"
    NONE = "none"


class Likelihood(IntEnum):
    """Classifier confidence, numbered as on the Vision API wire."""

    UNKNOWN = 0
    VERY_UNLIKELY = 1
    UNLIKELY = 2
    POSSIBLE = 3
    LIKELY = 4
    VERY_LIKELY = 5


@dataclass(frozen=True)
class FaceAnnotation:
    joy: Likelihood = Likelihood.UNKNOWN
    anger: Likelihood = Likelihood.UNKNOWN
    surprise: Likelihood = Likelihood.UNKNOWN
    sorrow: Likelihood = Likelihood.UNKNOWN
    headwear: Likelihood = Likelihood.UNKNOWN
    # Four (x, y) vertices, clockwise from top-left
    bounding_poly: tuple[tuple[int, int], ...] = ()


@dataclass
class FaceDetectionResult:
    """One entry of a face detection batch response."""

    faces: list[FaceAnnotation] = field(default_factory=list)
    error: str | None = None


class ErrorCode(IntEnum):
    OTHER = 100
    SLASHES_FORBIDDEN = 101
    BUCKET_MISSING = 102
    BLOB_MISSING = 103
    CONTENT_TYPE_MISSING = 104
    RESPONSE_COUNT = 105
    OBJECT_NAME_MISSING = 106
    NO_FACES = 107


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.OTHER: "Other",
    ErrorCode.SLASHES_FORBIDDEN: "Slashes are intentionally forbidden in objectName.",
    ErrorCode.BUCKET_MISSING: "Storage bucket name is missing or misconfigured.",
    ErrorCode.BLOB_MISSING: "Blob specified doesn't exist in bucket.",
    ErrorCode.CONTENT_TYPE_MISSING: "Blob content type is null.",
    ErrorCode.RESPONSE_COUNT: "Size of responses list is not 1.",
    ErrorCode.OBJECT_NAME_MISSING: "objectName is null or empty.",
    ErrorCode.NO_FACES: "We couldn't detect faces in your image.",
}

ERROR_STATUS: dict[ErrorCode, int] = {
    ErrorCode.OTHER: 500,
    ErrorCode.SLASHES_FORBIDDEN: 400,
    ErrorCode.BUCKET_MISSING: 500,
    ErrorCode.BLOB_MISSING: 400,
    ErrorCode.CONTENT_TYPE_MISSING: 400,
    ErrorCode.RESPONSE_COUNT: 500,
    ErrorCode.OBJECT_NAME_MISSING: 400,
    ErrorCode.NO_FACES: 400,
}


class EmojifyError(Exception):
    """A request failure carrying its error code and HTTP status."""

    def __init__(self, code: ErrorCode, message: str | None = None):
        self.code = code
        self.message = message or ERROR_MESSAGES[code]
        self.status_code = ERROR_STATUS[code]
        super().__init__(self.message)


class EmojifyResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    object_path: str | None = None
    emojified_url: str | None = None
    status_code: int = 200
    error_code: int | None = None
    error_message: str | None = None

    @model_validator(mode="after")
    def check_outcome(self) -> "EmojifyResponse":
        success = self.object_path is not None or self.emojified_url is not None
        failure = self.error_code is not None or self.error_message is not None
        if success == failure:
            raise ValueError("exactly one of success or failure fields must be set")
        if success and (self.object_path is None or self.emojified_url is None):
            raise ValueError("success requires objectPath and emojifiedUrl")
        if failure and (self.error_code is None or self.error_message is None):
            raise ValueError("failure requires errorCode and errorMessage")
        return self

    @classmethod
    def success(cls, object_path: str, emojified_url: str) -> "EmojifyResponse":
        return cls(object_path=object_path, emojified_url=emojified_url)

    @classmethod
    def failure(cls, status_code: int, code: ErrorCode, message: str) -> "EmojifyResponse":
        return cls(status_code=status_code, error_code=int(code), error_message=message)
