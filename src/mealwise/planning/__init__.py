"""
Mealwise - Planning.

Turns a household's ratings into a weekly plan: skeleton, prompts, response
parsing, reconciliation, and the orchestration around them.
"""
