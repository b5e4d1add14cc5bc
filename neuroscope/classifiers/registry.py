"""
Classifier registry - maps strategy names to implementations and builds
the per-modality classifier set from configuration.
"""
from typing import Dict, Type, Optional

from neuroscope.classifiers.base import BaseClassifier
from neuroscope.classifiers.heuristic import DeterministicHeuristicClassifier
from neuroscope.classifiers.service import ServiceBackedClassifier, SERVICE_MODALITIES
from neuroscope.core.config import Settings, settings, get_classifier_strategies
from neuroscope.core.logging import get_logger
from neuroscope.detection.artifact import Modality
from neuroscope.detection.errors import ClassifierNotFoundError
from neuroscope.llm.base import LLMAdapter

logger = get_logger("classifiers.registry")


class ClassifierRegistry:
    """
    Registry for classifier implementations.

    Maps strategy name -> BaseClassifier subclass
    """

    _classifiers: Dict[str, Type[BaseClassifier]] = {}

    @classmethod
    def register(cls, strategy: str, classifier_class: Type[BaseClassifier]) -> None:
        """
        Register a classifier implementation.

        Args:
            strategy: Strategy name (e.g., "heuristic")
            classifier_class: BaseClassifier subclass
        """
        cls._classifiers[strategy] = classifier_class

    @classmethod
    def get_class(cls, strategy: str) -> Type[BaseClassifier]:
        """
        Get the classifier class for a strategy.

        Raises:
            ClassifierNotFoundError: If strategy not registered
        """
        if strategy not in cls._classifiers:
            available = list(cls._classifiers.keys())
            raise ClassifierNotFoundError(
                f"Classifier strategy '{strategy}' not registered. "
                f"Available: {available}"
            )
        return cls._classifiers[strategy]


def build_classifier(
    modality: Modality,
    strategy: str,
    llm: Optional[LLMAdapter] = None
) -> BaseClassifier:
    """
    Build the classifier for one modality.

    A service strategy without an inference service, or for a modality the
    service cannot take, degrades to the heuristic classifier.
    """
    classifier_class = ClassifierRegistry.get_class(strategy)

    if issubclass(classifier_class, ServiceBackedClassifier):
        if modality not in SERVICE_MODALITIES:
            logger.warning(
                f"Service classification unsupported for {modality.value}, using heuristic"
            )
            return DeterministicHeuristicClassifier(modality)
        if llm is None:
            logger.warning(
                f"No inference service configured for {modality.value}, using heuristic"
            )
            return DeterministicHeuristicClassifier(modality)
        return classifier_class(modality, llm)

    return classifier_class(modality)


def build_classifiers(
    llm: Optional[LLMAdapter] = None,
    config: Optional[Settings] = None
) -> Dict[Modality, BaseClassifier]:
    """Build one classifier per modality from configuration."""
    config = config or settings
    strategies = get_classifier_strategies(config)

    classifiers = {}
    for modality in Modality:
        classifiers[modality] = build_classifier(modality, strategies[modality.value], llm)
        logger.info(f"Classifier for {modality.value}: {classifiers[modality].strategy}")
    return classifiers


# ===== REGISTER BUILT-IN CLASSIFIERS =====

ClassifierRegistry.register(DeterministicHeuristicClassifier.strategy, DeterministicHeuristicClassifier)
ClassifierRegistry.register(ServiceBackedClassifier.strategy, ServiceBackedClassifier)
