"""Core package for shared functionality.

This package provides the foundational components used across openroute:

- **config**: Centralized configuration management with environment support
- **constants**: Shared defaults and validation messages
- **context**: Request context and correlation ID management
- **exceptions**: Structured exception hierarchy with error codes
- **logging**: Structured logging with Loguru
- **types**: Type aliases for better code clarity
"""
