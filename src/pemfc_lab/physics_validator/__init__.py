"""
Physics Validator Package
Checks model outputs against physical bounds and derived-field consistency.
"""

from .validator import PhysicsValidator, ValidationResult

__all__ = ['PhysicsValidator', 'ValidationResult']
