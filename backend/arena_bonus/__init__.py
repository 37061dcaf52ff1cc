"""Material comeback bonus points for arena tournament standings."""
