"""
Presentation helpers: severity classification, icons and popup text.
"""

from trusttxt_validator.presentation.messages import Popup, render
from trusttxt_validator.presentation.severity import Severity, icon_for, result_severity, severity

__all__ = ["Popup", "Severity", "icon_for", "render", "result_severity", "severity"]
