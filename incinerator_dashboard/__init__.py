"""
Incinerator Operations Dashboard

Analytics backend for the daily intake, incineration and pit-storage
figures reported by the four municipal incineration plants.

To ingest operator notes:
    Call loaders.parse_operational_text(text, default_date) on the pasted
    text. Records come back in input order; check record.is_complete (or
    validators.validate_record) before saving.

To swap the simulator for the spreadsheet store:
    Pass the store's rows through transforms.records_from_rows(); every
    downstream function takes a plain list of OperationalRecord.

To connect to Streamlit:
    Call dashboard.get_dashboard_overview(records, selected_date) to get a
    plain dict for the metric cards, alerts and downtime banner, and
    dashboard.get_trend_series(records) for the trend chart.

To add a new input label:
    Add the synonym to config.FIELD_LABEL_MAP.
"""
