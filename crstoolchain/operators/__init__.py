"""Processor stack and nesting statistics for nested processor blocks."""