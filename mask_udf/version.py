"""Mask UDF Meta information.
   Mask UDF provides hashing, masking and encryption functions
   to be registered as scalar functions of a SQL engine.
"""
__title__ = 'mask_udf'
__description__ = (
   'Hashing, masking and reversible encryption primitives '
   'exposed as SQL scalar functions.'
)
__version__ = '0.1.0'
__copyright__ = 'Copyright (c) 2023 Canner'
__author__ = 'Canner'
__license__ = 'Apache-2.0'
