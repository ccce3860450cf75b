"""ETL Processing Modules

This package contains the processing modules built on the snapshot ETL
framework. Each module implements the ModuleProcessor interface.
"""
