"""Rankings and statistics computed over the purchases ledger."""
