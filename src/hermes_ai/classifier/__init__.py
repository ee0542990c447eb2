from hermes_ai.classifier.base import Classifier
from hermes_ai.classifier.claude import ClaudeClassifier
from hermes_ai.classifier.static import StaticClassifier

__all__ = ["Classifier", "ClaudeClassifier", "StaticClassifier"]
