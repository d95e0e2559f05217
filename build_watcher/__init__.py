"""Watches a CodeBuild build on behalf of a CloudFormation custom resource."""

__version__ = "0.1.0"
