from flask_login import LoginManager

from shophub.utils.identity import IdentityProvider

login_manager = LoginManager()

identity_provider = IdentityProvider()
