"""HTTP command layer for the blackjack table."""
