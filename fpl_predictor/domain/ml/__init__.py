"""Machine Learning domain components."""

from .feature_schema import FEATURE_SCHEMA, build_feature_vector, field_schema
from .transformers import FeatureSelector

__all__ = ["FEATURE_SCHEMA", "FeatureSelector", "build_feature_vector", "field_schema"]
