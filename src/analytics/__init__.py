"""
Review analytics.

- Review statistics: per-hotel rating breakdown and category averages
- Hotel rating report: statistics for every hotel as a CSV table
"""
