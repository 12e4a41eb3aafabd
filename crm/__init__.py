"""Customer Pulse CRM API"""
