"""
Configuration loading and validation.

Provides strongly typed settings objects read from environment variables
(and an optional .env file) with upfront validation.
"""
