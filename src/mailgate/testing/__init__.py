"""Testing – fakes for exercising mailgate without a network."""
