"""CloudPulse Shared Package.

This package contains components shared by the CloudPulse services:
- models: Pydantic catalog and status models
- config: Configuration management
- observability: Structured logging
"""

__version__ = "0.1.0"
