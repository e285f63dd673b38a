"""
Static site content.

Sample rows shown on public pages while the corresponding table is empty, plus
the content that only ever lived in the pages themselves (services catalogue,
gallery, open positions, past event highlights).
Templates read these with attribute syntax, the same as model rows.
"""

from __future__ import annotations

from datetime import date

SAMPLE_TESTIMONIALS: list[dict] = [
    {
        "name": "Priya Sharma",
        "role": "B.Tech Student",
        "company": "IIT Delhi",
        "content": "The AI/ML workshop by Innovex Arena was incredibly hands-on. I built my first neural network "
        "and gained practical skills that helped me secure an internship!",
        "rating": 5,
        "image_url": None,
        "event_name": "AI & ML Workshop",
    },
    {
        "name": "Rahul Verma",
        "role": "Software Developer",
        "company": "TCS",
        "content": "Participated in their hackathon and won second place. The mentorship and problem statements "
        "were industry-relevant. Highly recommend their programs!",
        "rating": 5,
        "image_url": None,
        "event_name": "Tech Innovators Hackathon",
    },
    {
        "name": "Anjali Reddy",
        "role": "MCA Student",
        "company": "JNTU Hyderabad",
        "content": "The cloud computing bootcamp gave me hands-on AWS experience. The trainers were experts and "
        "the certification prep was thorough.",
        "rating": 5,
        "image_url": None,
        "event_name": "Cloud Computing Bootcamp",
    },
]

SAMPLE_POSTS: list[dict] = [
    {
        "title": "Getting Started with Generative AI: A Beginner's Guide",
        "slug": "getting-started-generative-ai",
        "excerpt": "Learn the fundamentals of generative AI, including how models like GPT and DALL-E work, "
        "and how to start building your own AI applications.",
        "content": None,
        "cover_image": None,
        "category": "AI",
        "published_at": date(2024, 12, 1),
    },
    {
        "title": "Cloud Computing Trends for 2025",
        "slug": "cloud-computing-trends-2025",
        "excerpt": "Explore the latest trends in cloud computing, from serverless architectures to multi-cloud "
        "strategies that will shape the industry in 2025.",
        "content": None,
        "cover_image": None,
        "category": "Cloud",
        "published_at": date(2024, 11, 25),
    },
    {
        "title": "How to Prepare for Your First Hackathon",
        "slug": "prepare-first-hackathon",
        "excerpt": "Tips and strategies to help you succeed in your first hackathon, from team formation to "
        "project ideation and presentation.",
        "content": None,
        "cover_image": None,
        "category": "Events",
        "published_at": date(2024, 11, 20),
    },
    {
        "title": "Building Scalable Web Applications with React",
        "slug": "scalable-web-apps-react",
        "excerpt": "Best practices for building large-scale React applications, including state management, "
        "code splitting, and performance optimization.",
        "content": None,
        "cover_image": None,
        "category": "Development",
        "published_at": date(2024, 11, 15),
    },
]

SAMPLE_PRODUCTS: list[dict] = [
    {
        "name": "AI Content Generator",
        "description": "An intelligent content generation platform powered by advanced language models. "
        "Create blog posts, social media content, and marketing copy in seconds.",
        "short_description": "AI-powered content creation platform",
        "image_url": None,
        "demo_url": None,
        "github_url": None,
        "technologies": ["Python", "OpenAI", "React", "FastAPI"],
        "category": "ai",
        "is_featured": True,
    },
    {
        "name": "CloudSync Dashboard",
        "description": "A unified cloud management dashboard that integrates with AWS, Azure, and GCP. Monitor "
        "resources, manage costs, and optimize performance across multiple cloud providers.",
        "short_description": "Multi-cloud management solution",
        "image_url": None,
        "demo_url": None,
        "github_url": None,
        "technologies": ["TypeScript", "AWS", "Azure", "Next.js"],
        "category": "cloud",
        "is_featured": True,
    },
    {
        "name": "Smart Campus IoT",
        "description": "An IoT solution for smart campus management. Includes automated attendance, energy "
        "management, and real-time monitoring of campus facilities.",
        "short_description": "IoT-based campus automation",
        "image_url": None,
        "demo_url": None,
        "github_url": None,
        "technologies": ["Arduino", "MQTT", "Node.js", "MongoDB"],
        "category": "iot",
        "is_featured": False,
    },
    {
        "name": "Resume Analyzer AI",
        "description": "AI-powered resume analysis tool that provides actionable feedback, skill gap analysis, "
        "and job matching recommendations for job seekers.",
        "short_description": "AI resume optimization tool",
        "image_url": None,
        "demo_url": None,
        "github_url": None,
        "technologies": ["Python", "NLP", "React", "PostgreSQL"],
        "category": "ai",
        "is_featured": True,
    },
]

# Upcoming events shown while no event is published. Not registrable.
SAMPLE_EVENTS: list[dict] = [
    {
        "title": "AI & Machine Learning Workshop",
        "description": "Deep dive into neural networks, TensorFlow, and practical ML applications.",
        "date_label": "January 15, 2025",
        "location": "Virtual Event",
        "capacity_label": "100+ Expected",
        "event_type": "workshop",
        "status": "Registration Open",
    },
    {
        "title": "Cloud Computing Bootcamp",
        "description": "Hands-on AWS certification prep with real-world projects.",
        "date_label": "January 22-23, 2025",
        "location": "Hyderabad, India",
        "capacity_label": "50 Seats",
        "event_type": "bootcamp",
        "status": "Registration Open",
    },
    {
        "title": "Innovation Hackathon 2025",
        "description": "48-hour hackathon with prizes worth ₹5 Lakhs. Build solutions for real problems.",
        "date_label": "February 10-11, 2025",
        "location": "Multiple Colleges",
        "capacity_label": "500+ Participants",
        "event_type": "hackathon",
        "status": "Coming Soon",
    },
    {
        "title": "Generative AI Masterclass",
        "description": "Learn to build applications with ChatGPT API, DALL-E, and other Gen AI tools.",
        "date_label": "February 25, 2025",
        "location": "Online",
        "capacity_label": "200+ Expected",
        "event_type": "masterclass",
        "status": "Registration Open",
    },
]

PAST_EVENTS: list[dict] = [
    {"title": "Cybersecurity Workshop", "date_label": "December 2024", "attendees": "150+", "location": "Bangalore"},
    {"title": "Tech Innovators Hackathon", "date_label": "November 2024", "attendees": "300+", "location": "Multiple Cities"},
    {"title": "Data Science Bootcamp", "date_label": "October 2024", "attendees": "80+", "location": "Chennai"},
    {"title": "IoT Workshop Series", "date_label": "September 2024", "attendees": "120+", "location": "Hyderabad"},
]

SERVICES_PREVIEW: list[dict] = [
    {"title": "AI & ML Workshops", "description": "Hands-on learning in Artificial Intelligence, Machine Learning, and Generative AI technologies."},
    {"title": "Cloud Computing", "description": "Master cloud platforms and build scalable solutions with AWS, Azure, and GCP."},
    {"title": "Web & App Dev", "description": "Full-stack development training covering modern frameworks and best practices."},
    {"title": "Hackathons", "description": "College hackathons, innovation challenges, and idea pitch competitions."},
    {"title": "Training Programs", "description": "1-day bootcamps to 30-day certification programs for comprehensive learning."},
    {"title": "Student Development", "description": "Resume building, interview prep, projects, and internship opportunities."},
]

SERVICE_CATALOGUE: list[dict] = [
    {
        "title": "Workshops",
        "items": [
            ("AI & ML", "Artificial Intelligence and Machine Learning fundamentals"),
            ("Generative AI", "ChatGPT, DALL-E, and creative AI applications"),
            ("Cloud Computing", "AWS, Azure, GCP platforms and services"),
            ("Web Development", "Modern frameworks, APIs and deployment"),
            ("Cybersecurity", "Ethical hacking and secure coding practices"),
            ("IoT", "Connected devices, sensors and automation"),
        ],
    },
    {
        "title": "Hackathons",
        "items": [
            ("College Hackathons", "Campus-wide coding competitions and challenges"),
            ("Innovation Challenges", "Problem-solving competitions for real-world issues"),
            ("Idea Pitches", "Startup idea presentation and validation events"),
        ],
    },
    {
        "title": "Training Programs",
        "items": [
            ("1-2 Day Bootcamps", "Intensive short-term skill-building sessions"),
            ("1-Week Intensives", "Deep-dive programs for comprehensive learning"),
            ("30-Day Certifications", "Complete certification courses with projects"),
        ],
    },
    {
        "title": "Student Development",
        "items": [
            ("Resume Building", "Professional resume creation and optimization"),
            ("Interview Prep", "Mock interviews and communication skills"),
            ("Projects", "Real-world project experience and portfolio building"),
            ("Internships", "Placement support with partner companies"),
        ],
    },
]

_UNSPLASH = "https://images.unsplash.com/photo-{}?w=600&h=400&fit=crop"

GALLERY_CATEGORIES = ("All", "Workshop", "Hackathon", "Bootcamp", "Event", "Video")

GALLERY_ITEMS: list[dict] = [
    {"type": "image", "title": "AI & ML Workshop 2024", "category": "Workshop",
     "description": "Participants learning machine learning fundamentals", "thumbnail": _UNSPLASH.format("1485827404703-89b55fcc595e")},
    {"type": "image", "title": "Innovation Hackathon", "category": "Hackathon",
     "description": "Teams brainstorming innovative solutions", "thumbnail": _UNSPLASH.format("1504384308090-c894fdcc538d")},
    {"type": "image", "title": "Cloud Computing Bootcamp", "category": "Bootcamp",
     "description": "Hands-on AWS training session", "thumbnail": _UNSPLASH.format("1451187580459-43490279c0fa")},
    {"type": "image", "title": "Team Collaboration", "category": "Hackathon",
     "description": "Students working on their projects", "thumbnail": _UNSPLASH.format("1522071820081-009f0129c71c")},
    {"type": "image", "title": "Cybersecurity Session", "category": "Workshop",
     "description": "Learning about ethical hacking", "thumbnail": _UNSPLASH.format("1550751827-4bd374c3f58b")},
    {"type": "image", "title": "Award Ceremony", "category": "Event",
     "description": "Recognizing top performers", "thumbnail": _UNSPLASH.format("1540575467063-178a50c2df87")},
    {"type": "video", "title": "Innovex Arena Introduction", "category": "Video",
     "description": "Watch our journey and mission", "thumbnail": _UNSPLASH.format("1611162616475-46b635cb6868"),
     "video_url": "https://youtube.com/@innovexarena"},
    {"type": "image", "title": "Web Development Sprint", "category": "Workshop",
     "description": "Building full-stack applications", "thumbnail": _UNSPLASH.format("1498050108023-c5249f4df085")},
    {"type": "image", "title": "Networking Session", "category": "Event",
     "description": "Industry experts meeting students", "thumbnail": _UNSPLASH.format("1515187029135-18ee286d815b")},
]

_CS_STUDENT = "Currently pursuing B.Tech/BE in Computer Science or related field"

INTERNSHIP_POSITIONS: list[dict] = [
    {
        "id": "frontend-intern",
        "title": "Frontend Developer Intern",
        "duration": "3-6 Months",
        "location": "Remote / Hybrid",
        "description": "Build beautiful, responsive user interfaces using React, TypeScript, and modern CSS frameworks.",
        "requirements": [
            _CS_STUDENT,
            "Proficiency in HTML, CSS, and JavaScript",
            "Experience with React.js or similar frameworks",
            "Understanding of responsive design principles",
            "Basic knowledge of Git version control",
        ],
    },
    {
        "id": "backend-intern",
        "title": "Backend Developer Intern",
        "duration": "3-6 Months",
        "location": "Remote / Hybrid",
        "description": "Build scalable APIs and backend services using Node.js, Python, and cloud technologies.",
        "requirements": [
            _CS_STUDENT,
            "Proficiency in Python, Node.js, or Java",
            "Understanding of databases (SQL/NoSQL)",
            "Basic knowledge of RESTful APIs",
            "Problem-solving aptitude",
        ],
    },
    {
        "id": "uiux-intern",
        "title": "UI/UX Design Intern",
        "duration": "3-6 Months",
        "location": "Remote / Hybrid",
        "description": "Create stunning user experiences and design systems for web and mobile applications.",
        "requirements": [
            "Currently pursuing Design, HCI, or related field",
            "Proficiency in Figma or Adobe XD",
            "Understanding of UI/UX principles",
            "Portfolio showcasing design work",
            "Knowledge of design systems",
        ],
    },
    {
        "id": "cloud-intern",
        "title": "Cloud & DevOps Intern",
        "duration": "3-6 Months",
        "location": "Remote / Hybrid",
        "description": "Learn cloud infrastructure management and DevOps practices with AWS, Azure, and GCP.",
        "requirements": [
            _CS_STUDENT,
            "Basic knowledge of Linux/Unix",
            "Understanding of cloud concepts",
            "Familiarity with Docker",
            "Interest in automation and CI/CD",
        ],
    },
]

CAREER_POSITIONS: list[dict] = [
    {
        "id": "tpm-intern",
        "title": "Technical Project Manager Intern",
        "duration": "3-6 Months",
        "location": "Remote / Hybrid",
        "description": "Join our team as a TPM Intern and learn to manage technical projects, coordinate with "
        "development teams, and deliver results.",
        "requirements": [
            _CS_STUDENT,
            "Strong communication and organizational skills",
            "Basic understanding of software development lifecycle",
            "Ability to work in a fast-paced environment",
            "Proficiency in tools like Jira, Trello, or similar",
        ],
    },
    {
        "id": "dev-intern",
        "title": "Software Developer Intern",
        "duration": "3-6 Months",
        "location": "Remote / Hybrid",
        "description": "Build real-world applications and gain hands-on experience with modern technologies in "
        "our development team.",
        "requirements": [
            _CS_STUDENT,
            "Proficiency in at least one programming language (Python/JavaScript/Java)",
            "Basic knowledge of web development (HTML, CSS, React/Angular)",
            "Understanding of databases (SQL/NoSQL)",
            "Problem-solving aptitude and willingness to learn",
        ],
    },
]

YEARS_OF_STUDY = ("1st Year", "2nd Year", "3rd Year", "4th Year", "Graduate")

CONTACT_INFO = {
    "email": "innovexarena@gmail.com",
    "phone": "+91 93926 02264",
    "website": "https://www.innovexarena.com",
    "instagram": "https://www.instagram.com/innovex_arena",
    "youtube": "https://youtube.com/@innovexarena",
    "linkedin": "https://linkedin.com/company/innovex-arena",
}


def filter_by_category(items: list, category: str | None, *, all_value: str = "all") -> list:
    """In-memory category filter; blank or `all_value` keeps everything. Case-insensitive."""
    wanted = (category or "").strip().lower()
    if not wanted or wanted == all_value.lower():
        return list(items)
    out = []
    for item in items:
        value = item.get("category") if isinstance(item, dict) else getattr(item, "category", None)
        if (value or "").lower() == wanted:
            out.append(item)
    return out
