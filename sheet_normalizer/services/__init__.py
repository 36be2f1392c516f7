"""Normalization services: sampling, analysis, mapping, transformation and validation."""
