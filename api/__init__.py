"""
FastAPI backend for Bet Tracker.

Provides REST API endpoints for:
- Pick and parlay tracking
- Bankroll management
- User accounts and sessions
- Performance statistics
"""
