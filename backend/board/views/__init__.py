from board.views.auth_handlers import login as login
from board.views.auth_handlers import logout as logout
from board.views.auth_handlers import register as register
from board.views.handlers import create_templates as create_templates
from board.views.handlers import health as health
from board.views.handlers import home_page as home_page
from board.views.handlers import index_page as index_page
from board.views.handlers import login_page as login_page
from board.views.handlers import register_page as register_page
from board.views.post_handlers import create_post as create_post
from board.views.post_handlers import delete_post as delete_post
from board.views.post_handlers import list_posts as list_posts
from board.views.post_handlers import update_post as update_post
