"""
Tasker - core library for the Tasker backend service.

This package contains:
- config: Startup configuration assembly and validation
- storage: Object storage upload adapter
- logging_config: Unified logging setup
"""
