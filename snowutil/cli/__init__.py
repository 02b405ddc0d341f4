"""命令行工具模块"""
