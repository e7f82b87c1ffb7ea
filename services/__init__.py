"""
services/ - Business Logic Layer
================================
Orchestrates repositories: transactional sale registration, CSV imports
and report exports.
"""
