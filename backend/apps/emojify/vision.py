"""Face detection through Google Cloud Vision."""
from abc import ABC, abstractmethod

from google.cloud import vision

from apps.emojify.models import FaceAnnotation, FaceDetectionResult, Likelihood

ERROR_FALLBACK = "Vision API returned an error"


class FaceClassifier(ABC):
    """Detects faces and their emotion likelihoods in a stored image."""

    @abstractmethod
    def detect_faces(self, image_uri: str, max_results: int = 100) -> list[FaceDetectionResult]:
        """Submit one detection request; return every response entry as received."""
        pass


def to_face_annotation(face: vision.FaceAnnotation) -> FaceAnnotation:
    return FaceAnnotation(
        joy=Likelihood(int(face.joy_likelihood)),
        anger=Likelihood(int(face.anger_likelihood)),
        surprise=Likelihood(int(face.surprise_likelihood)),
        sorrow=Likelihood(int(face.sorrow_likelihood)),
        headwear=Likelihood(int(face.headwear_likelihood)),
        bounding_poly=tuple((v.x, v.y) for v in face.fd_bounding_poly.vertices),
    )


class GoogleVisionClassifier(FaceClassifier):
    def __init__(self, client: vision.ImageAnnotatorClient | None = None) -> None:
        self.client = client or vision.ImageAnnotatorClient()

    def detect_faces(self, image_uri: str, max_results: int = 100) -> list[FaceDetectionResult]:
        request = vision.AnnotateImageRequest(
            image=vision.Image(source=vision.ImageSource(gcs_image_uri=image_uri)),
            features=[vision.Feature(type_=vision.Feature.Type.FACE_DETECTION, max_results=max_results)],
        )
        response = self.client.batch_annotate_images(requests=[request])

        results = []
        for resp in response.responses:
            if resp.error.code:
                results.append(FaceDetectionResult(error=resp.error.message or ERROR_FALLBACK))
                continue
            results.append(FaceDetectionResult(faces=[to_face_annotation(f) for f in resp.face_annotations]))
        return results

