"""
terrascope

Turns Terraform state files into dependency graphs for visualization.
"""
