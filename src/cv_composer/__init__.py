"""Build and publish many curated CVs from one master career profile."""
