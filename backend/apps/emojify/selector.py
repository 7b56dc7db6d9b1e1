"""Emoji selection from face annotation likelihoods."""
from operator import attrgetter

from apps.emojify.models import Emoji, FaceAnnotation, Likelihood

# Most confident first; UNLIKELY and below never select anything
CONFIDENT_LIKELIHOODS = (Likelihood.VERY_LIKELY, Likelihood.LIKELY, Likelihood.POSSIBLE)

# Among equally confident emotions the earlier entry wins
EMOTION_PRIORITY = (
    (Emoji.JOY, attrgetter("joy")),
    (Emoji.ANGER, attrgetter("anger")),
    (Emoji.SURPRISE, attrgetter("surprise")),
    (Emoji.SORROW, attrgetter("sorrow")),
)


def select_emotion_emoji(annotation: FaceAnnotation) -> Emoji:
    """Return the most confident emotion of a face, or Emoji.NONE."""
    for likelihood in CONFIDENT_LIKELIHOODS:
        for emoji, accessor in EMOTION_PRIORITY:
            if accessor(annotation) == likelihood:
                return emoji
    return Emoji.NONE


def select_hat_overlay(annotation: FaceAnnotation) -> bool:
    return annotation.headwear in CONFIDENT_LIKELIHOODS
