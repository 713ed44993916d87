"""第三方框架集成."""
