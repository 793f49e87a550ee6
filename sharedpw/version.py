"""SharedPW Meta information.
   SharedPW stores an encrypted secret that can be revealed exactly once.
"""
__title__ = 'sharedpw'
__description__ = (
   'SharedPW stores an encrypted secret under a random identifier '
   'and destroys it on first reveal.'
)
__version__ = '0.3.0'
__copyright__ = 'Copyright (c) 2023 Jesus Lara'
__author__ = 'Jesus Lara'
__author_email__ = 'jesuslarag@gmail.com'
__license__ = 'Apache-2.0'
__url__ = 'https://github.com/phenobarbital/sharedpw'
