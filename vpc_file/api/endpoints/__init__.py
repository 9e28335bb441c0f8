"""Typed endpoint functions for the shares and IAM APIs."""
