"""Reporting: Excel workbook and charts for the model comparison."""

from credit_risk.reporting.report_exporter import ReportExporter

__all__ = ["ReportExporter"]
