"""
Contact analysis facade.

Runs the stress field, integrator and line search for one wheel/soil input
document and produces the output models.
"""

from terramech.analysis.analyzer import ContactAnalyzer

__all__ = ["ContactAnalyzer"]
