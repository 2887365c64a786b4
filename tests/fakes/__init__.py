"""Fakes em memória para testes sem IO."""
