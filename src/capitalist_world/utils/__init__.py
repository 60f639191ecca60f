"""
Utility modules organized by domain.

Submodules:
- logging_config: Logging setup that keeps records off the terminal
- threading: Serial callback context shared by clock and renderer
- ui: Frame rendering, terminal mode control and status line formatting
"""
