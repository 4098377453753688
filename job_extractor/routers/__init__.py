"""HTTP routers for the extraction API."""
