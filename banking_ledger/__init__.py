"""Banking Ledger: accounts, deposits, withdrawals and atomic transfers."""
