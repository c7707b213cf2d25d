"""Front ends for the budget ledger: the interactive CLI and the Streamlit dashboard."""
