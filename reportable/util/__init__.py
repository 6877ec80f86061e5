from reportable.util import db
