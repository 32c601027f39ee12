"""Routes package for the FACT-G Scoring Service."""
