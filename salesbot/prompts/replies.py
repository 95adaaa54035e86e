"""
Bilingual reply templates.

All user-facing copy lives here as a language-indexed table so the
Spanish and English variants are edited side by side. Templates use
``str.format`` placeholders filled by ``render``.
"""

REPLIES: dict[str, dict[str, str]] = {
    # --- Canned intents ---
    "greeting": {
        "es": "Hola, soy la asistente comercial de {company}. Puedo ayudarte con servicios, productos, citas y soporte.",
        "en": "Hi, I am the commercial assistant of {company}. I can help with services, products, appointments and support.",
    },
    "personal": {
        "es": "Soy una asistente virtual de {company}. Puedo ayudarte con productos, servicios, citas y pedidos.",
        "en": "I am a virtual assistant from {company}. I can help with products, services, appointments and orders.",
    },
    "smalltalk": {
        "es": "Uno rapido: por que un lead cruza el embudo? Para convertirse en venta. Si quieres, seguimos con tu consulta.",
        "en": "Quick one: why did the lead cross the funnel? To become a sale. If you want, we continue with your request.",
    },
    "privacy": {
        "es": "Nota de privacidad demo: evita compartir datos personales sensibles aqui. Este chat es para orientacion de productos y servicios.",
        "en": "Demo privacy note: avoid sharing sensitive personal data here. This chat is for product and service guidance.",
    },
    "identity_intro": {
        "es": "Soy la asistente comercial de {company}.\n- A que nos dedicamos: {description}",
        "en": "I am the commercial assistant of {company}.\n- What we do: {description}",
    },
    "location_short": {
        "es": "Direccion: {address}\nQuieres tambien el horario o la ubicacion en Google Maps?",
        "en": "Address: {address}\nWould you like schedule or Google Maps location?",
    },
    "location_intro": {
        "es": "Estamos en {address}.\n- Horario: {schedule}",
        "en": "We are at {address}.\n- Schedule: {schedule}",
    },
    "location_outro": {
        "es": "Quieres que te envie la ubicacion en Google Maps o concertar una cita?",
        "en": "Would you like Google Maps location or to schedule an appointment?",
    },
    "default_schedule": {
        "es": "L-V de 9:30 a 19:00",
        "en": "Mon-Fri 09:30 to 19:00",
    },
    "directions_address": {
        "es": "Direccion: {address}.",
        "en": "Address: {address}.",
    },
    "directions_parking": {
        "es": "Para parking, revisa disponibilidad en tiempo real cerca de la oficina.",
        "en": "For parking, check live availability near the office before you go.",
    },
    "directions_transport": {
        "es": "Para transporte publico, usa esta direccion en tu app de rutas para ver opciones actuales.",
        "en": "For public transport, use this address in your route app to see current options.",
    },
    "directions_outro": {
        "es": "Si quieres, te envio ubicacion para mapa y te ayudo a concertar una visita.",
        "en": "If you want, I can share a map link and help you book a visit.",
    },
    "contact_intro": {
        "es": "Datos de contacto de {company}:",
        "en": "Contact details for {company}:",
    },
    "contact_whatsapp": {
        "es": "- WhatsApp: disponible en {phone}.",
        "en": "- WhatsApp: available on {phone}.",
    },
    "contact_human": {
        "es": "Si quieres, {contact} te contacta directamente.",
        "en": "If you want, {contact} can contact you directly.",
    },
    "catalog_intro": {
        "es": "Estas son las principales categorias disponibles:",
        "en": "These are the main categories available:",
    },
    "catalog_outro_vehicle": {
        "es": "Para recambios, dime marca/modelo del vehiculo, ano, motor o VIN.",
        "en": "For parts, share vehicle brand/model, year, engine, or VIN.",
    },
    "catalog_outro_property": {
        "es": "Si buscas vivienda, dime zona, presupuesto y habitaciones.",
        "en": "If you are searching properties, share area, budget and bedrooms.",
    },
    "catalog_outro_default": {
        "es": "Si me dices tu objetivo, te recomiendo la mejor opcion de arranque.",
        "en": "Tell me your objective and I suggest the best starting option.",
    },
    "property_redirect": {
        "es": "Ahora mismo te atiendo desde {company}. Cambia a {property_company} para busqueda de viviendas.",
        "en": "You are currently speaking with {company}. Switch to {property_company} for property search.",
    },
    "out_of_scope": {
        "es": "Puedo ayudarte con servicios, productos, precios, citas y soporte de {company}.\n"
              "Si necesitas una respuesta mas personalizada, {contact} te contactara con una respuesta mas personalizada.",
        "en": "I can help you with services, products, pricing, appointments and support from {company}.\n"
              "If you need a tailored answer, {contact} can contact you with a personalized answer.",
    },

    # --- Flow starts ---
    "appointment_start": {
        "es": "Perfecto. Vamos a concertar tu cita. Cual es el motivo de la reunion?",
        "en": "Perfect. Let us schedule your appointment. What is the reason for the meeting?",
    },
    "property_start": {
        "es": "Claro. Para mostrarte viviendas disponibles, dime primero zona o ciudad.",
        "en": "Great. To show available properties, tell me area or city first.",
    },
    "vehicle_start": {
        "es": "Perfecto. Para anadir el filtro correcto, necesito datos del vehiculo: marca/modelo, ano, motor o VIN.",
        "en": "Perfect. To add the correct filter, I need vehicle data: brand/model, year, engine, or VIN.",
    },
    "flow_cancelled": {
        "es": "Perfecto. He cancelado el proceso activo. Como quieres que te ayude ahora?",
        "en": "Done. I canceled the active process. How can I help you now?",
    },

    # --- Interruptions while a flow is pending ---
    "interrupt_property": {
        "es": "Claro. Para busqueda de vivienda necesito zona, presupuesto, habitaciones, tipo y objetivo.",
        "en": "Sure. For property search I need area, budget, bedrooms, type and goal.",
    },
    "interrupt_greeting": {
        "es": "Hola, sigo aqui contigo.",
        "en": "Hi, I am still with you.",
    },
    "interrupt_smalltalk": {
        "es": "Claro. Y ahora continuamos donde lo dejamos.",
        "en": "Sure. And now, let us continue where we left off.",
    },
    "interrupt_personal": {
        "es": "Soy una asistente virtual, y puedo seguir ayudandote con tu solicitud.",
        "en": "I am a virtual assistant, and I can continue helping with your request.",
    },
    "interrupt_privacy": {
        "es": "No puedo compartir datos privados de pedidos de terceros.",
        "en": "I cannot share third-party private order data.",
    },

    # --- Appointment steps ---
    "cita_motivo_retry": {
        "es": "Indica el motivo de la cita (por ejemplo: asesoria, presupuesto, seguimiento).",
        "en": "Please tell me the reason for the appointment (for example: advisory, quote, follow-up).",
    },
    "cita_fecha_prompt": {
        "es": "Genial. Que fecha te viene mejor?",
        "en": "Great. What date works best for you?",
    },
    "cita_fecha_retry": {
        "es": "Necesito una fecha para continuar (por ejemplo: manana, jueves, 15/02).",
        "en": "I need a date to continue (for example: tomorrow, Thursday, 15/02).",
    },
    "cita_hora_prompt": {
        "es": "Perfecto. Que hora prefieres?",
        "en": "Perfect. What time do you prefer?",
    },
    "cita_hora_retry": {
        "es": "Necesito una hora valida (por ejemplo: 10:30, por la tarde, despues de las 17:00).",
        "en": "I need a valid time (for example: 10:30, afternoon, after 17:00).",
    },
    "cita_modalidad_prompt": {
        "es": "Presencial u online?",
        "en": "In-person or online?",
    },
    "cita_modalidad_retry": {
        "es": "Elige una modalidad: presencial u online.",
        "en": "Please choose one mode: in-person or online.",
    },
    "cita_contacto_prompt": {
        "es": "Ultimo paso. A que telefono o email te confirmamos?",
        "en": "Last step. What phone or email should we use to confirm?",
    },
    "cita_contacto_retry": {
        "es": "Necesito un telefono o email valido para confirmar la cita.",
        "en": "I need a valid phone or email to confirm the appointment.",
    },
    "cita_summary": {
        "es": "Perfecto, ya tengo tu solicitud de cita:\n"
              "- Motivo: {cita_motivo}\n"
              "- Fecha: {cita_fecha}\n"
              "- Hora: {cita_hora}\n"
              "- Modalidad: {cita_modalidad}\n"
              "- Contacto: {cita_contacto}\n"
              "{contact} te contactara en breve.",
        "en": "Perfect, your appointment request is ready:\n"
              "- Reason: {cita_motivo}\n"
              "- Date: {cita_fecha}\n"
              "- Time: {cita_hora}\n"
              "- Mode: {cita_modalidad}\n"
              "- Contact: {cita_contacto}\n"
              "{contact} will contact you shortly.",
    },

    # --- Property steps ---
    "prop_zona_retry": {
        "es": "Dime primero zona o ciudad.",
        "en": "Tell me area or city first.",
    },
    "prop_presupuesto_prompt": {
        "es": "Perfecto. Que presupuesto manejas?",
        "en": "Great. What budget do you have?",
    },
    "prop_presupuesto_retry": {
        "es": "Indica un presupuesto aproximado.",
        "en": "Please share an approximate budget.",
    },
    "prop_habitaciones_prompt": {
        "es": "Cuantas habitaciones necesitas?",
        "en": "How many bedrooms do you need?",
    },
    "prop_habitaciones_retry": {
        "es": "Cuantas habitaciones?",
        "en": "How many bedrooms?",
    },
    "prop_tipo_prompt": {
        "es": "Que tipo buscas? (piso, chalet, obra nueva, inversion)",
        "en": "What type are you looking for? (apartment, house, new build, investment)",
    },
    "prop_tipo_retry": {
        "es": "Elige tipo: piso, chalet, obra nueva, inversion o local.",
        "en": "Choose type: apartment, house, new build, investment, commercial.",
    },
    "prop_objetivo_prompt": {
        "es": "Es para vivir o inversion?",
        "en": "Is it for living or investment?",
    },
    "prop_objetivo_retry": {
        "es": "Es para vivir, alquilar o inversion?",
        "en": "Is it for living, renting or investment?",
    },
    "prop_done": {
        "es": "Perfecto. Ya tengo tu perfil y puedo prepararte opciones.",
        "en": "Perfect. I have your profile and can prepare matching options.",
    },

    # --- Vehicle step ---
    "vehicle_retry": {
        "es": "Necesito datos del vehiculo: marca/modelo, ano, motor o VIN.",
        "en": "I still need vehicle data: brand/model, year, engine, or VIN.",
    },
    "vehicle_added": {
        "es": "Perfecto, he anadido {title} al carrito.",
        "en": "Perfect, I added {title} to your cart.",
    },

    # --- Pending-question reminders ---
    "pending_cita_motivo": {
        "es": "Para continuar, cual es el motivo de la cita?",
        "en": "To continue, what is the reason for the appointment?",
    },
    "pending_cita_fecha": {
        "es": "Para continuar, que fecha te viene bien?",
        "en": "To continue, what date works best for you?",
    },
    "pending_cita_hora": {
        "es": "Para continuar, que hora prefieres?",
        "en": "To continue, what time do you prefer?",
    },
    "pending_cita_modalidad": {
        "es": "Para continuar, elige presencial u online.",
        "en": "To continue, choose in-person or online.",
    },
    "pending_cita_contacto": {
        "es": "Para terminar, comparte telefono o email.",
        "en": "To finish, share phone or email.",
    },
    "pending_propiedad_zona": {
        "es": "Para continuar, dime zona o ciudad.",
        "en": "To continue, tell me area or city.",
    },
    "pending_propiedad_presupuesto": {
        "es": "Para continuar, dime presupuesto.",
        "en": "To continue, tell me your budget.",
    },
    "pending_propiedad_habitaciones": {
        "es": "Para continuar, cuantas habitaciones?",
        "en": "To continue, how many bedrooms?",
    },
    "pending_propiedad_tipo": {
        "es": "Para continuar, que tipo?",
        "en": "To continue, what type?",
    },
    "pending_propiedad_objetivo": {
        "es": "Para continuar, es para vivir o inversion?",
        "en": "To continue, is it for living or investment?",
    },
    "pending_carrito_datos_vehiculo": {
        "es": "Para continuar, comparte datos del vehiculo.",
        "en": "To continue, share vehicle details.",
    },

    # --- Deterministic fallback ---
    "fallback_added": {
        "es": "Perfecto, ya lo anadi al carrito: {title} ({price}).",
        "en": "Perfect, I added this to your cart: {title} ({price}).",
    },
    "fallback_removed": {
        "es": "Listo, lo quite del carrito: {title}.",
        "en": "Done, I removed it from your cart: {title}.",
    },
    "fallback_cleared": {
        "es": "He vaciado tu carrito.",
        "en": "I cleared your cart.",
    },
    "fallback_cart_summary": {
        "es": "Resumen actual del carrito:\n{cart}",
        "en": "Current cart summary:\n{cart}",
    },
    "fallback_inventory": {
        "es": "Ahora mismo no tengo inventario en vivo de pisos o locales dentro de esta base.\n"
              "Si te parece, {contact} te contactara con disponibilidad personalizada.",
        "en": "Right now I do not have a live inventory of properties or units in this knowledge base.\n"
              "If you want, {contact} will contact you with a personalized availability report.",
    },
    "fallback_company": {
        "es": "Claro. Te resumo rapidamente {company}:\n"
              "- A que se dedica: {description}\n"
              "- Valor principal: {benefits}\n"
              "- Contacto: {notes}",
        "en": "Of course. Here is a quick summary of {company}:\n"
              "- What they do: {description}\n"
              "- Main value: {benefits}\n"
              "- Contact details: {notes}",
    },
    "fallback_services_intro": {
        "es": "Genial, estos son los principales servicios/productos disponibles:",
        "en": "Great, these are the main services/products available:",
    },
    "fallback_services_outro": {
        "es": "Si me dices tu objetivo, te recomiendo el paquete de arranque mas adecuado.",
        "en": "Tell me your goal and I will suggest the best starting package.",
    },
    "fallback_recommendation": {
        "es": "Buena idea. Yo empezaria por:\n"
              "- {title} ({price})\n"
              "Por que esta opcion: {benefits}\n"
              "Si quieres, {contact} te contacta para definir un plan personalizado de implantacion.",
        "en": "Good idea. I suggest starting with:\n"
              "- {title} ({price})\n"
              "Why this option: {benefits}\n"
              "If you want, {contact} can contact you to define a personalized rollout plan.",
    },
    "fallback_top_match": {
        "es": "Por lo que me comentas, esta es la opcion mas ajustada ahora:\n"
              "- {title} ({price})\n"
              "Que incluye: {description}\n"
              "Beneficio principal: {benefits}\n"
              "Si necesitas una respuesta mas personalizada, {contact} puede contactarte directamente.",
        "en": "Based on what you asked, this is the best fit right now:\n"
              "- {title} ({price})\n"
              "What it includes: {description}\n"
              "Main benefit: {benefits}\n"
              "If you need a more tailored answer, {contact} can contact you directly.",
    },
    "proxy_fallback": {
        "es": "Puedo ayudarte con productos, servicios y datos de contacto de {company}.",
        "en": "I can help with products, services and contact details for {company}.",
    },
}

# Labels for the contact/identity bullet lists.
FIELD_LABELS: dict[str, dict[str, str]] = {
    "address": {"es": "Direccion", "en": "Address"},
    "office": {"es": "Oficina", "en": "Office"},
    "schedule": {"es": "Horario", "en": "Schedule"},
    "phone": {"es": "Telefono", "en": "Phone"},
    "email": {"es": "Email", "en": "Email"},
}


def _lang_key(lang: str) -> str:
    return "en" if lang == "en" else "es"


def render(key: str, lang: str, **values: object) -> str:
    """Render the template ``key`` in ``lang`` ("en" or anything else → "es")."""
    return REPLIES[key][_lang_key(lang)].format(**values)


def label(field_name: str, lang: str) -> str:
    return FIELD_LABELS[field_name][_lang_key(lang)]
