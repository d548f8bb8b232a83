"""Local stand-in for the remote articles resource."""
