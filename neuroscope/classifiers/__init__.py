"""
Classifier strategies and registry.

Classifiers are swappable black boxes behind one capability:
classify(artifact, fingerprint) -> RawVerdict.

- DeterministicHeuristicClassifier: seed-driven placeholder, never suspends
- ServiceBackedClassifier: asks an external inference service
"""
from neuroscope.classifiers.registry import (
    ClassifierRegistry,
    build_classifier,
    build_classifiers
)
from neuroscope.classifiers.base import BaseClassifier
from neuroscope.classifiers.heuristic import DeterministicHeuristicClassifier
from neuroscope.classifiers.service import ServiceBackedClassifier

__all__ = [
    "ClassifierRegistry",
    "build_classifier",
    "build_classifiers",
    "BaseClassifier",
    "DeterministicHeuristicClassifier",
    "ServiceBackedClassifier"
]
