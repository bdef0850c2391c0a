"""
Patient Service Backend - Patient Record Management

This module provides the backend services for managing patient records,
including creation, lookup, update, deletion and search of patients.
"""

__version__ = "1.0.0"
__author__ = "Patient Service Team"
