"""
Credit Risk Walkthrough

Trains and compares credit default classifiers (logistic regression,
fast-forest, fast-trees and an ensemble), then persists the best model.
"""

__version__ = "1.0.0"
__author__ = "Credit Scoring Team"
