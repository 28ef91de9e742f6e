"""DH Lotto — automated Lotto 6/45 purchase on dhlottery.co.kr."""

__version__ = "0.1.0"
