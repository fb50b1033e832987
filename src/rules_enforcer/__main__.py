from rules_enforcer.cli import entry_point

entry_point()
