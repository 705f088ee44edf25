"""Application layer: purity verdicts and their reporting."""
