"""
Test package for Herb Recommendation project.

This package contains pytest test suites for:
- Keyword extraction, category classification and herb matching
- Reference table loading and validation
- Herb catalog search and recommendation history
- API endpoint testing

Run all tests with: pytest tests/ -v
Run specific test with: pytest tests/test_symptom_analyzer.py -v
"""
