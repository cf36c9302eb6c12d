# Canned samples served by POST /api/demo/load, keyed by the demo type the UI sends.

SAMPLE_CONTRACT = """MSP SERVICE AGREEMENT

Client: TechFlow Solutions
Service Level Agreement:
- Response time: 4 hours for critical issues
- Uptime guarantee: 99.5%
- Monthly service fee: $5,000

Services Include:
- 24/7 monitoring and support
- Server maintenance and updates
- Security monitoring
- Backup management

Hourly rates:
- Standard support: $150/hour
- Emergency support: $200/hour
- Project work: $175/hour"""

SAMPLE_WORK_LOGS = """Date,Client,Service,Hours,Rate,Status
2023-12-01,TechFlow Solutions,Emergency Server Recovery,8,200,Completed
2023-12-02,TechFlow Solutions,Network Troubleshooting,3,150,Completed
2023-12-03,DataFlow Inc,Security Incident Response,12,200,Completed
2023-12-05,CloudFirst Ltd,Database Migration,6,175,Completed
2023-12-07,TechFlow Solutions,After Hours Maintenance,4,200,Completed"""

SAMPLE_LICENSES = """Tool,Users Licensed,Users Active,Monthly Cost,Last Login
Microsoft 365,50,45,$750,2023-12-15
Slack Premium,30,28,$180,2023-12-15
Zoom Pro,25,15,$375,2023-11-20
Adobe Creative Cloud,20,8,$1200,2023-10-15
Atlassian Suite,15,12,$225,2023-12-14
Salesforce,10,10,$1500,2023-12-15
Dropbox Business,35,20,$525,2023-12-10"""

# demo type -> (file type, original filename, content)
DEMOS = {
    "contract": ("contract", "sample_contract.txt", SAMPLE_CONTRACT),
    "logs": ("worklog", "work_logs_q4.csv", SAMPLE_WORK_LOGS),
    "licenses": ("license", "license_audit.csv", SAMPLE_LICENSES),
}
