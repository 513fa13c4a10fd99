"""
Sheet data ingestion module.

Handles downloading the published sheet, checking the payload and parsing
the CSV table into stock records.
"""
