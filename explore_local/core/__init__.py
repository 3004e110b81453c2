"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants, service endpoints, defaults
- logging: Logging setup for hosts (Functions app, scripts)
- exceptions: Custom exception hierarchy
"""
