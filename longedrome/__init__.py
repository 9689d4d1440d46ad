"""LONGEDROME palindrome duel engine."""
