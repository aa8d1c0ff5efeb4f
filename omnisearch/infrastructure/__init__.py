"""Infrastructure: configuration, remote gateway, providers and encoders."""
