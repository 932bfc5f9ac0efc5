"""Text screens and layout helpers of the interactive setup wizard."""