"""Cost-benefit calculation engine: formulas, result types and orchestrator."""
