"""
terrascope.models

Pydantic models for Terraform state documents, the resource graph and
runtime settings.
"""
