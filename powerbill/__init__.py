"""PowerBill billing and customer-management service."""
