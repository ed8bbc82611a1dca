"""Domain services: calendar helpers, aggregation, record transitions and change broadcast."""
