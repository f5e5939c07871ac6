"""Survey payout splitter.

Splits one survey/respondent workbook into per-source payout artifacts,
referral payout totals, a disqualification report and a merged voucher CSV.
"""

__version__ = "0.3.0"
