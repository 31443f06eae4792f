"""
Admin Access Log Model
"""

from padoo.extensions import db


class AdminAccessLog(db.Model):
    """Admin login attempts and session activity (logout, timeouts)"""
    __tablename__ = 'admin_access_logs'
    
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(120), nullable=False, default='Unknown')
    action = db.Column(db.String(40), nullable=False, default='login')
    login_successful = db.Column(db.Boolean, nullable=False, default=False)
    failure_reason = db.Column(db.String(255))
    ip_address = db.Column(db.String(64))
    user_agent = db.Column(db.String(512))
    details = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp(), index=True)
    
    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'action': self.action,
            'login_successful': self.login_successful,
            'failure_reason': self.failure_reason,
            'ip_address': self.ip_address,
            'user_agent': self.user_agent,
            'details': self.details,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
    
    def __repr__(self):
        return f'<AdminAccessLog {self.username} {self.action}>'
