"""Application layer – search orchestration and pagination."""
